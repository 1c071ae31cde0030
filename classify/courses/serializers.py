from rest_framework import serializers

from ..assessment.models import Quiz
from .models import Course, Lesson


class LessonSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lesson
        fields = ["id", "course", "title", "content", "display_order"]


class CourseQuizSerializer(serializers.ModelSerializer):
    class Meta:
        model = Quiz
        fields = ["id", "course", "lesson", "title"]


class CourseListSerializer(serializers.ModelSerializer):
    instructor_name = serializers.CharField(read_only=True)

    class Meta:
        model = Course
        fields = ["id", "title", "description", "level", "duration", "instructor", "instructor_name"]


class CourseDetailSerializer(CourseListSerializer):
    """
    Course with its content. Projects are not modelled and always come back
    as an empty list so clients can map over them.
    """

    lessons = LessonSerializer(many=True, read_only=True)
    quizzes = CourseQuizSerializer(many=True, read_only=True)
    projects = serializers.SerializerMethodField()

    class Meta(CourseListSerializer.Meta):
        fields = CourseListSerializer.Meta.fields + ["lessons", "quizzes", "projects"]

    def get_projects(self, obj):
        return []
