"""
Classify User Management Models

Extends Django's built-in User model with a profile carrying the user's role
on the platform. Profiles are created automatically through Django signals.

Models:
- Profile: Role of a user (student, instructor, admin)

Author: Classify Development Team
Version: 1.0.0
"""

from django.conf import settings
from django.db import models
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _

__all__ = ["Profile"]


class Profile(models.Model):
    """
    Extended user profile for the Classify platform.

    Attributes:
        user: One-to-one relationship with Django User model
        role: Platform role, students by default
    """

    class Role(models.TextChoices):
        STUDENT = "student", _("Student")
        INSTRUCTOR = "instructor", _("Instructor")
        ADMIN = "admin", _("Admin")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
        verbose_name=_("Role"),
        help_text=_("Role of the user on the platform"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "classify_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username}, role={self.role})>"


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Create a profile for every new user.

    get_or_create keeps this safe when a profile was already created
    explicitly in the same transaction.
    """
    if created:
        Profile.objects.get_or_create(user=instance)
