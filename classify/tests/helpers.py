"""
Shared test data builders for the Classify test suite.
"""

from django.contrib.auth.models import User

from classify.models import Course, Lesson, Question, QuestionOption, Quiz

TEST_PASSWORD = "Str0ng-Passw0rd!"


def create_user(email="student@test.com", password=TEST_PASSWORD, **extra):
    return User.objects.create_user(username=email, email=email, password=password, **extra)


def create_course(title="Python Basics", lesson_count=1):
    course = Course.objects.create(title=title, level="Beginner", duration="2 weeks")
    lessons = [
        Lesson.objects.create(course=course, title=f"Lesson {index + 1}", display_order=index)
        for index in range(lesson_count)
    ]
    return course, lessons


def create_quiz(lesson, correct_indices, option_count=3):
    """
    Attach a quiz to a lesson with one question per entry of correct_indices.

    An entry of None creates a question without a correct option, a list
    creates a question with several correct options.
    """
    quiz = Quiz.objects.create(course=lesson.course, lesson=lesson, title=f"{lesson.title} Quiz")
    for order, correct in enumerate(correct_indices):
        question = Question.objects.create(quiz=quiz, text=f"Question {order + 1}", order=order)
        marked = correct if isinstance(correct, list) else [correct]
        for index in range(option_count):
            QuestionOption.objects.create(
                question=question,
                text=f"Option {index}",
                is_correct=index in marked,
                order=index,
            )
    return quiz
