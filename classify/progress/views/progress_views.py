from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ..services.progress_service import ProgressAggregator


class DashboardStatsView(APIView):
    """Totals for the dashboard, scoped to enrolled courses."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(ProgressAggregator().dashboard_stats(request.user.id))


class CourseProgressView(APIView):
    """Per enrolled course progress for the achievements page."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(ProgressAggregator().course_progress_view(request.user.id))
