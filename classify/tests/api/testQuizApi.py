from rest_framework import status
from rest_framework.test import APITestCase

from classify.authentication import get_token_codec
from classify.models import Submission
from classify.tests.helpers import create_course, create_quiz, create_user


class QuizApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.course, (cls.lesson, cls.empty_lesson) = create_course(lesson_count=2)
        cls.quiz = create_quiz(cls.lesson, [0, 2, 1])

    def setUp(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {get_token_codec().issue(self.user.id)}")

    def submit(self, answers, lesson=None):
        lesson = lesson or self.lesson
        return self.client.post(
            f"/api/quizzes/lesson/{lesson.id}/submit/", {"answers": answers}, format="json"
        )

    def test_fetch_quiz_hides_correct_flags(self):
        response = self.client.get(f"/api/quizzes/lesson/{self.lesson.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        body = response.json()
        self.assertEqual(body["id"], self.quiz.id)
        self.assertEqual(body["lessonId"], self.lesson.id)
        self.assertEqual(len(body["questions"]), 3)
        for question in body["questions"]:
            self.assertEqual(len(question["options"]), 3)
            for option in question["options"]:
                self.assertEqual(set(option), {"id", "text"})

    def test_fetch_quiz_for_lesson_without_quiz(self):
        response = self.client.get(f"/api/quizzes/lesson/{self.empty_lesson.id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {"error": "Quiz not found for this lesson."})

    def test_submit(self):
        response = self.submit([0, 2, 0])
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        body = response.json()
        self.assertEqual(body["message"], "Quiz submitted successfully")
        self.assertEqual(body["score"], 2)
        self.assertEqual(body["totalQuestions"], 3)
        self.assertEqual([r["isCorrect"] for r in body["results"]], [True, True, False])
        self.assertTrue(Submission.objects.filter(pk=body["submissionId"], user=self.user).exists())

    def test_submit_empty_answers(self):
        response = self.submit([])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["details"], {"answers": ["No answers provided."]})
        self.assertFalse(Submission.objects.exists())

    def test_submit_missing_answers(self):
        response = self.client.post(
            f"/api/quizzes/lesson/{self.lesson.id}/submit/", {}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_submit_wrong_answer_count(self):
        response = self.submit([0, 2])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.json(),
            {
                "error": "Answer count mismatch with question count.",
                "details": {"expected": 3, "received": 2},
            },
        )
        self.assertFalse(Submission.objects.exists())

    def test_submit_to_lesson_without_quiz(self):
        response = self.submit([0], lesson=self.empty_lesson)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_submit_requires_authentication(self):
        self.client.credentials()
        self.assertEqual(self.submit([0, 2, 1]).status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Submission.objects.exists())

    def test_submission_belongs_to_token_subject(self):
        other = create_user(email="other@test.com")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {get_token_codec().issue(other.id)}")
        body = self.submit([0, 2, 1]).json()
        self.assertEqual(Submission.objects.get(pk=body["submissionId"]).user_id, other.id)
