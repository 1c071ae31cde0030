"""
Classify URL Configuration

URL Structure (mounted below /api/):
- auth/: Registration, login and current user
- courses/: Catalog and enrollment
- lessons/: Lesson retrieval and completion
- quizzes/: Quiz fetch and submission, addressed by lesson id
- progress/: Dashboard and per-course progress

Author: Classify Development Team
Version: 1.0.0
"""

from typing import List

from django.urls import URLPattern, include, path

from .assessment import views as quiz_views
from .courses import views as course_views
from .progress import views as progress_views
from .users import views as user_views

app_name = "classify"

# --- Authentication ---

auth_urlpatterns: List[URLPattern] = [
    path("register/", user_views.RegisterView.as_view(), name="register"),
    path("login/", user_views.LoginView.as_view(), name="login"),
    path("me/", user_views.MeView.as_view(), name="me"),
]

# --- Course Catalog ---

courses_urlpatterns: List[URLPattern] = [
    path("", course_views.CourseListView.as_view(), name="course-list"),
    path("<int:pk>/", course_views.CourseDetailView.as_view(), name="course-detail"),
    path("<int:pk>/enroll/", course_views.EnrollView.as_view(), name="course-enroll"),
]

lessons_urlpatterns: List[URLPattern] = [
    path("<int:pk>/", course_views.LessonDetailView.as_view(), name="lesson-detail"),
    path("<int:pk>/complete/", course_views.CompleteLessonView.as_view(), name="lesson-complete"),
]

# --- Assessment ---

quizzes_urlpatterns: List[URLPattern] = [
    path("lesson/<int:lesson_id>/", quiz_views.QuizByLessonView.as_view(), name="quiz-by-lesson"),
    path(
        "lesson/<int:lesson_id>/submit/",
        quiz_views.SubmitQuizByLessonView.as_view(),
        name="quiz-submit",
    ),
]

# --- Progress ---

progress_urlpatterns: List[URLPattern] = [
    path("dashboard/", progress_views.DashboardStatsView.as_view(), name="progress-dashboard"),
    path("courses/", progress_views.CourseProgressView.as_view(), name="progress-courses"),
]

urlpatterns: List[URLPattern] = [
    path("auth/", include((auth_urlpatterns, "auth"))),
    path("courses/", include((courses_urlpatterns, "courses"))),
    path("lessons/", include((lessons_urlpatterns, "lessons"))),
    path("quizzes/", include((quizzes_urlpatterns, "quizzes"))),
    path("progress/", include((progress_urlpatterns, "progress"))),
]
