from django.core.exceptions import ValidationError
from django.test import TestCase

from classify.assessment.services import GradingEngine
from classify.models import Enrollment, Question, QuestionOption, Quiz
from classify.progress.services.progress_service import ProgressAggregator
from classify.tests.helpers import create_course, create_user


class QuizCourseTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.course_a, _ = create_course(title="Course A")
        cls.course_b, (cls.lesson_b,) = create_course(title="Course B")

    def test_course_is_taken_from_lesson(self):
        quiz = Quiz.objects.create(course=self.course_a, lesson=self.lesson_b, title="Quiz")
        quiz.refresh_from_db()
        self.assertEqual(quiz.course_id, self.course_b.id)

    def test_course_defaults_to_lesson_course(self):
        quiz = Quiz.objects.create(lesson=self.lesson_b, title="Quiz")
        self.assertEqual(quiz.course_id, self.course_b.id)

    def test_clean_rejects_mismatched_course(self):
        quiz = Quiz(course=self.course_a, lesson=self.lesson_b, title="Quiz")
        with self.assertRaises(ValidationError) as ctx:
            quiz.full_clean()
        self.assertIn("course", ctx.exception.message_dict)

    def test_scores_are_filed_under_the_lesson_course(self):
        quiz = Quiz.objects.create(course=self.course_a, lesson=self.lesson_b, title="Quiz")
        question = Question.objects.create(quiz=quiz, text="Question", order=0)
        QuestionOption.objects.create(question=question, text="Yes", is_correct=True, order=0)
        Enrollment.enroll(user_id=self.user.id, course_id=self.course_b.id)

        GradingEngine().grade(quiz.id, self.user.id, [0])

        aggregator = ProgressAggregator()
        self.assertEqual(
            aggregator.quiz_score_view(self.user.id), {self.course_b.id: {self.lesson_b.id: 1}}
        )
        self.assertEqual(aggregator.dashboard_stats(self.user.id)["quizzesCompleted"], 1)
