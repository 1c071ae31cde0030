"""
Classify Assessment Models

Models:
- Quiz: Multiple choice quiz attached to exactly one lesson
- Question: Ordered question within a quiz
- QuestionOption: Ordered answer option, one of them marked correct
- Submission: One graded attempt at a quiz by one user
- SubmissionAnswer: Per-question result of a submission

Option order is significant: submissions answer with option indices, and
both the quiz fetch and the grading service order options by (order, id).

Author: Classify Development Team
Version: 1.0.0
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ..courses.models import Course, Lesson

__all__ = ["Quiz", "Question", "QuestionOption", "Submission", "SubmissionAnswer"]


class Quiz(models.Model):
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="quizzes",
        verbose_name=_("Course"),
    )

    lesson = models.OneToOneField(
        Lesson,
        on_delete=models.CASCADE,
        related_name="quiz",
        verbose_name=_("Lesson"),
        help_text=_("Lesson this quiz belongs to (one quiz per lesson)"),
    )

    title = models.CharField(
        max_length=255,
        verbose_name=_("Quiz Title"),
    )

    class Meta:
        verbose_name = _("Quiz")
        verbose_name_plural = _("Quizzes")
        ordering = ["course", "id"]
        db_table = "classify_quiz"

    def __str__(self) -> str:
        return self.title

    def clean(self):
        super().clean()
        if self.lesson_id and self.course_id and self.course_id != self.lesson.course_id:
            raise ValidationError(
                {"course": _("The quiz must belong to the course of its lesson.")}
            )

    def save(self, *args, **kwargs):
        # The course always follows the lesson
        if self.lesson_id:
            self.course_id = self.lesson.course_id
        super().save(*args, **kwargs)


class Question(models.Model):
    quiz = models.ForeignKey(
        Quiz,
        on_delete=models.CASCADE,
        related_name="questions",
        verbose_name=_("Quiz"),
    )

    text = models.TextField(verbose_name=_("Question Text"))

    order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
    )

    class Meta:
        verbose_name = _("Question")
        verbose_name_plural = _("Questions")
        ordering = ["quiz", "order", "id"]
        db_table = "classify_question"

    def __str__(self) -> str:
        return f"{self.quiz.title}: {self.text[:40]}"


class QuestionOption(models.Model):
    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="options",
        verbose_name=_("Question"),
    )

    text = models.CharField(
        max_length=500,
        verbose_name=_("Option Text"),
    )

    is_correct = models.BooleanField(
        default=False,
        verbose_name=_("Correct"),
        help_text=_("Exactly one option per question should be marked correct"),
    )

    order = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Display Order"),
        help_text=_("Position of the option; submissions answer with this index"),
    )

    class Meta:
        verbose_name = _("Question Option")
        verbose_name_plural = _("Question Options")
        ordering = ["question", "order", "id"]
        db_table = "classify_question_option"

    def __str__(self) -> str:
        return self.text


class Submission(models.Model):
    """
    One graded attempt at a quiz.

    Written together with its SubmissionAnswer rows in a single transaction
    and never updated afterwards. Retakes create new rows.
    """

    quiz = models.ForeignKey(
        Quiz,
        on_delete=models.CASCADE,
        related_name="submissions",
        verbose_name=_("Quiz"),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="quiz_submissions",
        verbose_name=_("User"),
    )

    score = models.PositiveIntegerField(
        verbose_name=_("Score"),
        help_text=_("Number of correctly answered questions"),
    )

    submitted_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_("Submitted At"),
    )

    class Meta:
        verbose_name = _("Quiz Submission")
        verbose_name_plural = _("Quiz Submissions")
        ordering = ["-submitted_at", "-id"]
        db_table = "classify_submission"

    def __str__(self) -> str:
        return f"Submission for {self.quiz.title} by {self.user.username}: {self.score}"


class SubmissionAnswer(models.Model):
    submission = models.ForeignKey(
        Submission,
        on_delete=models.CASCADE,
        related_name="answers",
        verbose_name=_("Submission"),
    )

    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="submitted_answers",
        verbose_name=_("Question"),
    )

    chosen_option = models.ForeignKey(
        QuestionOption,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name=_("Chosen Option"),
        help_text=_("Empty when the submitted index was out of range"),
    )

    is_correct = models.BooleanField(verbose_name=_("Correct"))

    class Meta:
        verbose_name = _("Submission Answer")
        verbose_name_plural = _("Submission Answers")
        unique_together = ("submission", "question")
        ordering = ["submission", "id"]
        db_table = "classify_submission_answer"

    def __str__(self) -> str:
        return f"{self.submission_id}/{self.question_id}: {self.is_correct}"
