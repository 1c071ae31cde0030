"""
Classify Assessment Serializers

Quiz payloads sent to students never contain option correctness flags.
"""

from rest_framework import serializers

from .models import Question, QuestionOption, Quiz


class QuestionOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuestionOption
        fields = ["id", "text"]


class QuestionSerializer(serializers.ModelSerializer):
    options = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = ["id", "text", "options"]

    def get_options(self, obj):
        # Same (order, id) sequence the grading service indexes into
        options = obj.options.order_by("order", "id")
        return QuestionOptionSerializer(options, many=True).data


class QuizSerializer(serializers.ModelSerializer):
    courseId = serializers.IntegerField(source="course_id", read_only=True)
    lessonId = serializers.IntegerField(source="lesson_id", read_only=True)
    questions = serializers.SerializerMethodField()

    class Meta:
        model = Quiz
        fields = ["id", "courseId", "lessonId", "title", "questions"]

    def get_questions(self, obj):
        questions = obj.questions.order_by("order", "id")
        return QuestionSerializer(questions, many=True).data


class QuizSubmissionSerializer(serializers.Serializer):
    """Body of a quiz submission: one option index per question, in order."""

    answers = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=False,
        error_messages={"empty": "No answers provided."},
    )
