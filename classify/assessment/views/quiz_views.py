"""
Classify Quiz Views

Quizzes are addressed by lesson id, matching the client navigation:

- GET  /api/quizzes/lesson/<lesson_id>/         quiz without correctness flags
- POST /api/quizzes/lesson/<lesson_id>/submit/  grade and store an attempt
"""

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...exceptions import NotFound
from ..models import Quiz
from ..serializers import QuizSerializer, QuizSubmissionSerializer
from ..services.grading_service import GradingEngine


class QuizByLessonView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, lesson_id):
        quiz = Quiz.objects.filter(lesson_id=lesson_id).first()
        if quiz is None:
            raise NotFound("Quiz not found for this lesson.")
        return Response(QuizSerializer(quiz).data)


class SubmitQuizByLessonView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, lesson_id):
        serializer = QuizSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = GradingEngine().grade_for_lesson(
            lesson_id=lesson_id,
            user_id=request.user.id,
            answers=serializer.validated_data["answers"],
        )
        data = {"message": "Quiz submitted successfully"}
        data.update(result.to_dict())
        return Response(data, status=status.HTTP_201_CREATED)
