"""
Classify Course Views Package

Catalog browsing, enrollment, lesson retrieval and lesson completion.
"""

from .course_views import CourseDetailView, CourseListView, EnrollView
from .lesson_views import CompleteLessonView, LessonDetailView
