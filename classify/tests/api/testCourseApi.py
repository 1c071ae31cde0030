from rest_framework import status
from rest_framework.test import APITestCase

from classify.authentication import get_token_codec
from classify.models import Enrollment, UserLessonProgress
from classify.tests.helpers import create_course, create_quiz, create_user


class CourseCatalogTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.course, cls.lessons = create_course(lesson_count=2)
        create_quiz(cls.lessons[0], [0])

    def test_course_list_is_public(self):
        response = self.client.get("/api/courses/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()[0]["title"], "Python Basics")

    def test_course_detail_contains_lessons_and_quizzes(self):
        response = self.client.get(f"/api/courses/{self.course.id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        body = response.json()
        self.assertEqual([lesson["id"] for lesson in body["lessons"]], [l.id for l in self.lessons])
        self.assertEqual(len(body["quizzes"]), 1)
        self.assertEqual(body["projects"], [])

    def test_unknown_course(self):
        response = self.client.get(f"/api/courses/{self.course.id + 1000}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", response.json())


class EnrollmentAndLessonTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.course, cls.lessons = create_course(lesson_count=2)

    def setUp(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {get_token_codec().issue(self.user.id)}")

    def test_enroll_once(self):
        url = f"/api/courses/{self.course.id}/enroll/"
        first = self.client.post(url)
        second = self.client.post(url)

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(second.json(), {"message": "Already enrolled"})
        self.assertEqual(Enrollment.objects.filter(user=self.user, course=self.course).count(), 1)

    def test_enroll_unknown_course(self):
        response = self.client.post(f"/api/courses/{self.course.id + 1000}/enroll/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {"error": "Course not found."})

    def test_enroll_requires_authentication(self):
        self.client.credentials()
        response = self.client.post(f"/api/courses/{self.course.id}/enroll/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_lesson_detail(self):
        response = self.client.get(f"/api/lessons/{self.lessons[1].id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["title"], "Lesson 2")

    def test_complete_lesson_twice(self):
        url = f"/api/lessons/{self.lessons[0].id}/complete/"
        first = self.client.post(url)
        second = self.client.post(url)

        self.assertEqual(first.json(), {"message": "Lesson marked as complete"})
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(UserLessonProgress.objects.filter(user=self.user).count(), 1)

    def test_complete_unknown_lesson(self):
        response = self.client.post(f"/api/lessons/{self.lessons[-1].id + 1000}/complete/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {"error": "Lesson not found."})


class ProgressApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_user()
        cls.course, cls.lessons = create_course(lesson_count=4)
        cls.quiz_lesson = cls.lessons[0]
        create_quiz(cls.quiz_lesson, [0, 1])

    def setUp(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {get_token_codec().issue(self.user.id)}")
        self.client.post(f"/api/courses/{self.course.id}/enroll/")

    def test_dashboard(self):
        self.client.post(f"/api/lessons/{self.lessons[0].id}/complete/")
        self.client.post(f"/api/lessons/{self.lessons[2].id}/complete/")

        response = self.client.get("/api/progress/dashboard/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.json(),
            {"totalLessons": 4, "completedLessons": 2, "quizzesCompleted": 0, "coursesEnrolled": 1},
        )

    def test_course_progress(self):
        self.client.post(
            f"/api/quizzes/lesson/{self.quiz_lesson.id}/submit/", {"answers": [0, 0]}, format="json"
        )

        response = self.client.get("/api/progress/courses/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        (course_progress,) = response.json()
        self.assertEqual(course_progress["id"], self.course.id)
        self.assertEqual(course_progress["quizzesCompleted"], 1)
        self.assertEqual(course_progress["totalQuizzes"], 1)
        self.assertEqual(course_progress["averageQuizScore"], 1)
        self.assertEqual(course_progress["lessonsCompleted"], 0)

    def test_progress_requires_authentication(self):
        self.client.credentials()
        self.assertEqual(
            self.client.get("/api/progress/dashboard/").status_code, status.HTTP_401_UNAUTHORIZED
        )
