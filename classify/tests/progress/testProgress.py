from datetime import datetime, timedelta, timezone

from django.test import SimpleTestCase, TestCase

from classify.assessment.services import GradingEngine
from classify.exceptions import NotFound
from classify.models import Enrollment, Submission, UserLessonProgress
from classify.progress.services.progress_service import (
    ProgressAggregator,
    ScoreRow,
    average_score,
    reduce_completed_lessons,
    reduce_latest_submissions,
    reduce_quiz_scores,
)
from classify.tests.helpers import create_course, create_quiz, create_user


class ReductionTests(SimpleTestCase):
    def setUp(self):
        self.t0 = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def row(self, submission_id, quiz_id, score, submitted_at, course_id=1, lesson_id=None):
        return ScoreRow(
            submission_id=submission_id,
            quiz_id=quiz_id,
            course_id=course_id,
            lesson_id=lesson_id or quiz_id * 10,
            score=score,
            submitted_at=submitted_at,
        )

    def test_completed_lessons_are_deduplicated(self):
        completed = reduce_completed_lessons([(1, 5), (1, 5), (1, 6), (2, 9)])
        self.assertEqual(completed, {1: {5, 6}, 2: {9}})

    def test_latest_submission_wins(self):
        rows = [
            self.row(1, 1, 3, self.t0 + timedelta(minutes=5)),
            self.row(2, 1, 1, self.t0),
        ]
        self.assertEqual(reduce_latest_submissions(rows)[1].score, 3)

    def test_equal_timestamps_break_ties_by_id(self):
        rows = [self.row(8, 1, 2, self.t0), self.row(7, 1, 0, self.t0)]
        self.assertEqual(reduce_latest_submissions(rows)[1].submission_id, 8)

    def test_quiz_scores_keyed_by_course_and_lesson(self):
        rows = [
            self.row(1, 1, 2, self.t0, course_id=1, lesson_id=11),
            self.row(2, 2, 4, self.t0, course_id=2, lesson_id=21),
        ]
        self.assertEqual(reduce_quiz_scores(rows), {1: {11: 2}, 2: {21: 4}})

    def test_average_score(self):
        self.assertEqual(average_score([]), 0)
        self.assertEqual(average_score([2, 3]), 2.5)
        self.assertEqual(average_score([1, 1, 2]), 1.33)


class ProgressAggregatorTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.course, cls.lessons = create_course(lesson_count=4)
        cls.quiz = create_quiz(cls.lessons[0], [0, 1])
        Enrollment.enroll(user_id=cls.user.id, course_id=cls.course.id)

    def setUp(self):
        self.aggregator = ProgressAggregator()

    def test_double_completion_is_recorded_once(self):
        lesson = self.lessons[0]
        self.assertTrue(self.aggregator.mark_lesson_complete(self.user.id, lesson.id))
        self.assertFalse(self.aggregator.mark_lesson_complete(self.user.id, lesson.id))
        self.assertEqual(UserLessonProgress.objects.filter(user=self.user, lesson=lesson).count(), 1)
        self.assertEqual(self.aggregator.lesson_completion_view(self.user.id), {self.course.id: {lesson.id}})

    def test_unknown_lesson(self):
        with self.assertRaises(NotFound):
            self.aggregator.mark_lesson_complete(self.user.id, self.lessons[-1].id + 1000)

    def test_partial_completion_counts(self):
        self.aggregator.mark_lesson_complete(self.user.id, self.lessons[0].id)
        self.aggregator.mark_lesson_complete(self.user.id, self.lessons[2].id)

        (course_progress,) = self.aggregator.course_progress_view(self.user.id)
        self.assertEqual(course_progress["lessonsCompleted"], 2)
        self.assertEqual(course_progress["totalLessons"], 4)

    def test_course_progress_without_attempts(self):
        (course_progress,) = self.aggregator.course_progress_view(self.user.id)
        self.assertEqual(course_progress["quizzesCompleted"], 0)
        self.assertEqual(course_progress["totalQuizzes"], 1)
        self.assertEqual(course_progress["averageQuizScore"], 0)
        self.assertEqual(course_progress["totalProjects"], 0)

    def test_quiz_scores_use_latest_attempt(self):
        engine = GradingEngine()
        engine.grade(self.quiz.id, self.user.id, [0, 1])
        engine.grade(self.quiz.id, self.user.id, [1, 1])

        self.assertEqual(
            self.aggregator.quiz_score_view(self.user.id),
            {self.course.id: {self.lessons[0].id: 1}},
        )
        (course_progress,) = self.aggregator.course_progress_view(self.user.id)
        self.assertEqual(course_progress["quizzesCompleted"], 1)
        self.assertEqual(course_progress["averageQuizScore"], 1)

    def test_same_timestamp_tie_broken_by_submission_id(self):
        engine = GradingEngine()
        first = engine.grade(self.quiz.id, self.user.id, [0, 1])
        second = engine.grade(self.quiz.id, self.user.id, [1, 0])
        stamp = Submission.objects.get(pk=first.submission_id).submitted_at
        Submission.objects.filter(pk=second.submission_id).update(submitted_at=stamp)

        scores = self.aggregator.quiz_score_view(self.user.id)
        self.assertEqual(scores[self.course.id][self.lessons[0].id], second.score)

    def test_progress_records(self):
        self.aggregator.mark_lesson_complete(self.user.id, self.lessons[1].id)
        GradingEngine().grade(self.quiz.id, self.user.id, [0, 1])

        record = self.aggregator.progress_records(self.user.id)[self.course.id]
        self.assertEqual(
            record.to_dict(),
            {
                "completedLessons": [self.lessons[1].id],
                "quizScores": {self.lessons[0].id: 2},
                "projectsCompleted": [],
            },
        )

    def test_dashboard_stats(self):
        self.aggregator.mark_lesson_complete(self.user.id, self.lessons[0].id)
        GradingEngine().grade(self.quiz.id, self.user.id, [0, 1])
        GradingEngine().grade(self.quiz.id, self.user.id, [0, 0])

        self.assertEqual(
            self.aggregator.dashboard_stats(self.user.id),
            {"totalLessons": 4, "completedLessons": 1, "quizzesCompleted": 1, "coursesEnrolled": 1},
        )

    def test_dashboard_ignores_courses_not_enrolled(self):
        _, (other_lesson,) = create_course(title="Unenrolled")
        self.aggregator.mark_lesson_complete(self.user.id, other_lesson.id)

        stats = self.aggregator.dashboard_stats(self.user.id)
        self.assertEqual(stats["completedLessons"], 0)
        self.assertEqual(stats["totalLessons"], 4)

    def test_new_user_has_no_progress(self):
        other = create_user(email="other@test.com")
        self.assertEqual(self.aggregator.progress_records(other.id), {})
        self.assertEqual(self.aggregator.course_progress_view(other.id), [])
        self.assertEqual(
            self.aggregator.dashboard_stats(other.id),
            {"totalLessons": 0, "completedLessons": 0, "quizzesCompleted": 0, "coursesEnrolled": 0},
        )
