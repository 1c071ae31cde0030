"""
Classify Course Catalog Models

Models:
- Course: A course with its catalog metadata
- Lesson: Ordered lesson within a course
- Enrollment: A user's enrollment in a course
- UserLessonProgress: Lesson-completion event, one per (user, lesson)

Progress is never stored as an aggregate: completion events and quiz
submissions are the only facts, see progress/services/progress_service.py.

Author: Classify Development Team
Version: 1.0.0
"""

from django.conf import settings
from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

__all__ = ["Course", "Lesson", "Enrollment", "UserLessonProgress"]


class Course(models.Model):
    """
    A course in the catalog.

    Attributes:
        title: Course title
        description: Long description
        level: Free-text level, e.g. "Beginner"
        duration: Free-text duration, e.g. "6 weeks"
        instructor: Optional instructor user
    """

    title = models.CharField(
        max_length=200,
        verbose_name=_("Course Title"),
    )

    description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
    )

    level = models.CharField(
        max_length=50,
        blank=True,
        verbose_name=_("Level"),
    )

    duration = models.CharField(
        max_length=50,
        blank=True,
        verbose_name=_("Duration"),
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="taught_courses",
        verbose_name=_("Instructor"),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["title", "id"]
        db_table = "classify_course"

    def __str__(self) -> str:
        return self.title

    @property
    def instructor_name(self) -> str:
        if self.instructor is None:
            return ""
        return f"{self.instructor.first_name} {self.instructor.last_name}".strip()


class Lesson(models.Model):
    course = models.ForeignKey(
        Course,
        related_name="lessons",
        on_delete=models.CASCADE,
        verbose_name=_("Course"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Lesson Title"),
    )

    content = models.TextField(
        blank=True,
        verbose_name=_("Content"),
    )

    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
        help_text=_("Order of lessons within the course (0 = first)"),
    )

    class Meta:
        verbose_name = _("Lesson")
        verbose_name_plural = _("Lessons")
        ordering = ["course", "display_order", "id"]
        db_table = "classify_lesson"

    def __str__(self) -> str:
        return f"{self.course.title} - {self.title}"


class Enrollment(models.Model):
    """
    A user's enrollment in a course.

    Enrollment is the access boundary for progress statistics: lessons and
    quizzes of courses the user is not enrolled in are never counted.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
        verbose_name=_("User"),
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrollments",
        verbose_name=_("Course"),
    )

    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Enrollment")
        verbose_name_plural = _("Enrollments")
        unique_together = ("user", "course")
        ordering = ["user", "course"]
        db_table = "classify_enrollment"

    def __str__(self) -> str:
        return f"{self.user.username} in {self.course.title}"

    @classmethod
    def enroll(cls, user_id: int, course_id: int) -> bool:
        """
        Enroll a user, returns False if the enrollment already existed.
        """
        enrollment, created = cls.objects.get_or_create(user_id=user_id, course_id=course_id)
        return created


class UserLessonProgress(models.Model):
    """
    Lesson-completion event.

    Keyed by the natural (user, lesson) identity, so completing a lesson
    twice never produces a second row.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="lesson_progress",
        verbose_name=_("User"),
    )

    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name="user_progress",
        verbose_name=_("Lesson"),
    )

    completed_at = models.DateTimeField(
        default=timezone.now,
        verbose_name=_("Completed At"),
    )

    class Meta:
        verbose_name = _("User Lesson Progress")
        verbose_name_plural = _("User Lesson Progress Entries")
        unique_together = ("user", "lesson")
        ordering = ["user", "lesson"]
        db_table = "classify_user_lesson_progress"

    def __str__(self) -> str:
        return f"{self.user.username} - {self.lesson.title}"

    @classmethod
    def mark_completed(cls, user_id: int, lesson_id: int) -> bool:
        """
        Record a completion event. Returns False if it already existed.

        A concurrent duplicate insert loses on the unique key and is treated
        as already complete.
        """
        try:
            with transaction.atomic():
                progress, created = cls.objects.get_or_create(user_id=user_id, lesson_id=lesson_id)
        except IntegrityError:
            if not cls.objects.filter(user_id=user_id, lesson_id=lesson_id).exists():
                raise
            return False
        return created
