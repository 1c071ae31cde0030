from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ...progress.services.progress_service import ProgressAggregator
from ..models import Lesson
from ..serializers import LessonSerializer


class LessonDetailView(generics.RetrieveAPIView):
    queryset = Lesson.objects.all()
    serializer_class = LessonSerializer
    permission_classes = [permissions.IsAuthenticated]


class CompleteLessonView(APIView):
    """Mark a lesson complete. Repeating the call is harmless."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        created = ProgressAggregator().mark_lesson_complete(user_id=request.user.id, lesson_id=pk)
        message = "Lesson marked as complete" if created else "Lesson was already complete"
        return Response({"message": message})
