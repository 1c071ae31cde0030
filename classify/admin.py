"""
Classify Django Admin Configuration

Sections:
- User Management: User admin with the profile role inline
- Course Catalog: Courses with inline lessons, enrollments
- Assessment: Quizzes with inline questions, questions with inline options,
  read-only submissions

Submissions are created by the grading service only; the admin shows them
read-only.

Author: Classify Development Team
Version: 1.0.0
"""

from typing import Optional

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.http import HttpRequest

from .models import (
    Course,
    Enrollment,
    Lesson,
    Profile,
    Question,
    QuestionOption,
    Quiz,
    Submission,
    SubmissionAnswer,
    UserLessonProgress,
)

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    verbose_name_plural = "Profile Information"
    fk_name = "user"
    fields = ("role",)

    def get_extra(self, request: HttpRequest, obj: Optional[User] = None, **kwargs) -> int:
        """Profiles are created by signal, never add extra forms."""
        return 0


class UserAdmin(BaseUserAdmin):
    inlines = (ProfileInline,)
    list_display = ("email", "first_name", "last_name", "get_role", "is_staff", "date_joined")
    list_select_related = ("profile",)

    @admin.display(description="Role")
    def get_role(self, obj: User) -> str:
        try:
            return obj.profile.get_role_display()
        except Profile.DoesNotExist:
            return "-"


admin.site.unregister(User)
admin.site.register(User, UserAdmin)


# --- Course Catalog Administration ---


class LessonInline(admin.TabularInline):
    model = Lesson
    extra = 0
    fields = ("title", "display_order")
    ordering = ("display_order", "id")


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "level", "duration", "instructor", "created_at")
    search_fields = ("title", "description")
    list_filter = ("level",)
    inlines = (LessonInline,)


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "display_order")
    list_filter = ("course",)
    search_fields = ("title",)
    ordering = ("course", "display_order", "id")


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "enrolled_at")
    list_filter = ("course",)
    search_fields = ("user__email", "course__title")


@admin.register(UserLessonProgress)
class UserLessonProgressAdmin(admin.ModelAdmin):
    list_display = ("user", "lesson", "completed_at")
    list_filter = ("lesson__course",)
    search_fields = ("user__email", "lesson__title")


# --- Assessment Administration ---


class QuestionInline(admin.StackedInline):
    model = Question
    extra = 0
    fields = ("text", "order")
    show_change_link = True


class QuestionOptionInline(admin.TabularInline):
    model = QuestionOption
    extra = 0
    fields = ("text", "is_correct", "order")
    ordering = ("order", "id")


@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "lesson")
    list_filter = ("course",)
    search_fields = ("title",)
    inlines = (QuestionInline,)


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("__str__", "quiz", "order")
    list_filter = ("quiz",)
    inlines = (QuestionOptionInline,)


class SubmissionAnswerInline(admin.TabularInline):
    model = SubmissionAnswer
    extra = 0
    can_delete = False
    fields = ("question", "chosen_option", "is_correct")
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj=None) -> bool:
        return False


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("quiz", "user", "score", "submitted_at")
    list_filter = ("quiz__course", "quiz")
    search_fields = ("user__email", "quiz__title")
    readonly_fields = ("quiz", "user", "score", "submitted_at")
    inlines = (SubmissionAnswerInline,)

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj=None) -> bool:
        return False
