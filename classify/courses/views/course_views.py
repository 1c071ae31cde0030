from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...exceptions import NotFound
from ..models import Course, Enrollment
from ..serializers import CourseDetailSerializer, CourseListSerializer

# --- Public Views ---


class CourseListView(generics.ListAPIView):
    queryset = Course.objects.select_related("instructor")
    serializer_class = CourseListSerializer
    permission_classes = [permissions.AllowAny]


class CourseDetailView(generics.RetrieveAPIView):
    queryset = Course.objects.select_related("instructor").prefetch_related("lessons", "quizzes")
    serializer_class = CourseDetailSerializer
    permission_classes = [permissions.AllowAny]


# --- User-Specific Views ---


class EnrollView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        if not Course.objects.filter(pk=pk).exists():
            raise NotFound("Course not found.")

        if Enrollment.enroll(user_id=request.user.id, course_id=pk):
            return Response({"message": "Enrolled successfully"}, status=status.HTTP_201_CREATED)
        return Response({"message": "Already enrolled"}, status=status.HTTP_200_OK)
