from .progress_views import CourseProgressView, DashboardStatsView
