"""
Progress Service for the Classify Platform

Read-side views of a user's progress, derived on every call from the raw
event tables:

- UserLessonProgress rows (lesson completions)
- Submission rows (graded quiz attempts)

There is no materialized progress table. Every view is a database query
followed by a pure reduction function, so nothing can go stale.

Views:
- lesson_completion_view: course id -> set of completed lesson ids
- quiz_score_view: course id -> lesson id -> latest score
- progress_records: both of the above as ProgressRecord per course
- dashboard_stats: counts scoped to the user's enrolled courses
- course_progress_view: per enrolled course completion and quiz statistics

Author: Classify Development Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Set, Tuple

from django.db.models import Count

from ...assessment.models import Submission
from ...courses.models import Course, Enrollment, Lesson, UserLessonProgress
from ...exceptions import NotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRow:
    """One submission, flattened with the course and lesson of its quiz."""

    submission_id: int
    quiz_id: int
    course_id: int
    lesson_id: int
    score: int
    submitted_at: datetime


@dataclass
class ProgressRecord:
    """
    Derived progress of one user in one course.

    Attributes:
        completed_lessons: Ids of completed lessons, no duplicates
        quiz_scores: Lesson id -> score of the latest submission
        projects_completed: Always empty, projects are not tracked
    """

    completed_lessons: Set[int] = field(default_factory=set)
    quiz_scores: Dict[int, int] = field(default_factory=dict)
    projects_completed: Set[int] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completedLessons": sorted(self.completed_lessons),
            "quizScores": dict(self.quiz_scores),
            "projectsCompleted": sorted(self.projects_completed),
        }


# --- Pure reductions ---


def reduce_completed_lessons(rows: Iterable[Tuple[int, int]]) -> Dict[int, Set[int]]:
    """
    Group (course_id, lesson_id) completion rows into sets per course.
    """
    completed: Dict[int, Set[int]] = {}
    for course_id, lesson_id in rows:
        completed.setdefault(course_id, set()).add(lesson_id)
    return completed


def reduce_latest_submissions(rows: Iterable[ScoreRow]) -> Dict[int, ScoreRow]:
    """
    Keep the latest submission per quiz.

    Latest means highest submitted_at; equal timestamps are broken by the
    highest submission id.
    """
    latest: Dict[int, ScoreRow] = {}
    for row in rows:
        current = latest.get(row.quiz_id)
        if current is None or (row.submitted_at, row.submission_id) > (
            current.submitted_at,
            current.submission_id,
        ):
            latest[row.quiz_id] = row
    return latest


def reduce_quiz_scores(rows: Iterable[ScoreRow]) -> Dict[int, Dict[int, int]]:
    scores: Dict[int, Dict[int, int]] = {}
    for row in reduce_latest_submissions(rows).values():
        scores.setdefault(row.course_id, {})[row.lesson_id] = row.score
    return scores


def average_score(scores: Iterable[int]) -> float:
    """Mean of the scores, 0 when there are none."""
    scores = list(scores)
    if not scores:
        return 0
    return round(sum(scores) / len(scores), 2)


class ProgressAggregator:
    """
    Stateless progress queries for one user at a time.

    Example:
        >>> aggregator = ProgressAggregator()
        >>> aggregator.mark_lesson_complete(user_id=7, lesson_id=1)
        True
        >>> aggregator.lesson_completion_view(7)
        {1: {1}}
    """

    def __init__(self) -> None:
        self.logger = logger

    # --- Write side ---

    def mark_lesson_complete(self, user_id: int, lesson_id: int) -> bool:
        """
        Record that a user completed a lesson.

        Idempotent: completing the same lesson again is a no-op.

        Returns:
            True if the completion was new, False if it already existed

        Raises:
            NotFound: If the lesson does not exist
        """
        if not Lesson.objects.filter(pk=lesson_id).exists():
            raise NotFound("Lesson not found.")

        created = UserLessonProgress.mark_completed(user_id=user_id, lesson_id=lesson_id)
        if created:
            self.logger.info(f"User {user_id} completed lesson {lesson_id}")
        return created

    # --- Read side ---

    def lesson_completion_view(self, user_id: int) -> Dict[int, Set[int]]:
        rows = UserLessonProgress.objects.filter(user_id=user_id).values_list(
            "lesson__course_id", "lesson_id"
        )
        return reduce_completed_lessons(rows)

    def quiz_score_view(self, user_id: int) -> Dict[int, Dict[int, int]]:
        return reduce_quiz_scores(self._score_rows(user_id))

    def progress_records(self, user_id: int) -> Dict[int, ProgressRecord]:
        """Per-course ProgressRecord for every course with any progress."""
        records: Dict[int, ProgressRecord] = {}
        for course_id, lessons in self.lesson_completion_view(user_id).items():
            records.setdefault(course_id, ProgressRecord()).completed_lessons.update(lessons)
        for course_id, scores in self.quiz_score_view(user_id).items():
            records.setdefault(course_id, ProgressRecord()).quiz_scores.update(scores)
        return records

    def dashboard_stats(self, user_id: int) -> Dict[str, int]:
        """
        Counting aggregates over the user's enrolled courses only.

        Progress rows of courses the user is not enrolled in are ignored.
        """
        enrolled = list(
            Enrollment.objects.filter(user_id=user_id).values_list("course_id", flat=True)
        )

        return {
            "totalLessons": Lesson.objects.filter(course_id__in=enrolled).count(),
            "completedLessons": UserLessonProgress.objects.filter(
                user_id=user_id, lesson__course_id__in=enrolled
            ).count(),
            "quizzesCompleted": Submission.objects.filter(
                user_id=user_id, quiz__course_id__in=enrolled
            )
            .values("quiz_id")
            .distinct()
            .count(),
            "coursesEnrolled": len(enrolled),
        }

    def course_progress_view(self, user_id: int) -> List[Dict[str, Any]]:
        """
        Completion and quiz statistics for each enrolled course.

        averageQuizScore is the mean of the latest score of every attempted
        quiz of the course, and 0 when no quiz was attempted.
        """
        courses = (
            Course.objects.filter(enrollments__user_id=user_id)
            .annotate(
                total_lessons=Count("lessons", distinct=True),
                total_quizzes=Count("quizzes", distinct=True),
            )
            .order_by("title", "id")
        )
        completed = self.lesson_completion_view(user_id)

        latest_by_course: Dict[int, List[int]] = {}
        for row in reduce_latest_submissions(self._score_rows(user_id)).values():
            latest_by_course.setdefault(row.course_id, []).append(row.score)

        progress = []
        for course in courses:
            scores = latest_by_course.get(course.id, [])
            progress.append(
                {
                    "id": course.id,
                    "title": course.title,
                    "level": course.level,
                    "duration": course.duration,
                    "lessonsCompleted": len(completed.get(course.id, ())),
                    "totalLessons": course.total_lessons,
                    "quizzesCompleted": len(scores),
                    "totalQuizzes": course.total_quizzes,
                    "averageQuizScore": average_score(scores),
                    "totalProjects": 0,
                    "projectsCompleted": 0,
                }
            )
        return progress

    def _score_rows(self, user_id: int) -> List[ScoreRow]:
        rows = Submission.objects.filter(user_id=user_id).values_list(
            "id", "quiz_id", "quiz__course_id", "quiz__lesson_id", "score", "submitted_at"
        )
        return [ScoreRow(*row) for row in rows]
