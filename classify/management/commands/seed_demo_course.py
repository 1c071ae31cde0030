import logging

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from ...models import Course, Lesson, Profile, Question, QuestionOption, Quiz

logger = logging.getLogger(__name__)

DEMO_INSTRUCTOR_EMAIL = "instructor@classify.local"

# Lesson title -> (content, [(question, [options], correct index)])
DEMO_LESSONS = {
    "What is Python?": (
        "Python is a general purpose programming language with a focus on readability.",
        [
            ("Which keyword defines a function?", ["def", "func", "function"], 0),
            ("How are blocks delimited?", ["Braces", "Keywords", "Indentation"], 2),
            ("Which type is immutable?", ["list", "tuple", "dict"], 1),
        ],
    ),
    "Variables and Types": (
        "Names are bound to objects; the object carries the type, not the name.",
        [
            ("What does type(1.0) return?", ["int", "float", "decimal"], 1),
            ("Which value is falsy?", ["[]", "'0'", "[0]"], 0),
        ],
    ),
    "Control Flow": (
        "if, for and while statements, plus break and continue.",
        [
            ("Which loop iterates over a sequence?", ["while", "for", "repeat"], 1),
        ],
    ),
    "Functions": (
        "Defining functions, default arguments and keyword arguments.",
        [],
    ),
}


class Command(BaseCommand):
    help = "Creates the 'Python Basics' demo course with lessons and quizzes. Safe to run repeatedly."

    def add_arguments(self, parser):
        parser.add_argument(
            "--title",
            default="Python Basics",
            help="Title of the demo course (default: Python Basics)",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        title = options["title"]

        if Course.objects.filter(title=title).exists():
            self.stdout.write(self.style.WARNING(f'Course "{title}" already exists, nothing to do.'))
            return

        instructor, created = User.objects.get_or_create(
            username=DEMO_INSTRUCTOR_EMAIL,
            defaults={"email": DEMO_INSTRUCTOR_EMAIL, "first_name": "Demo", "last_name": "Instructor"},
        )
        if created:
            instructor.set_unusable_password()
            instructor.save(update_fields=["password"])
        Profile.objects.filter(user=instructor).update(role=Profile.Role.INSTRUCTOR)

        course = Course.objects.create(
            title=title,
            description="A short introduction to the Python programming language.",
            level="Beginner",
            duration="2 weeks",
            instructor=instructor,
        )

        quiz_count = 0
        for position, (lesson_title, (content, questions)) in enumerate(DEMO_LESSONS.items()):
            lesson = Lesson.objects.create(
                course=course, title=lesson_title, content=content, display_order=position
            )
            if not questions:
                continue

            quiz = Quiz.objects.create(course=course, lesson=lesson, title=f"{lesson_title} Quiz")
            quiz_count += 1
            for question_order, (text, options_text, correct) in enumerate(questions):
                question = Question.objects.create(quiz=quiz, text=text, order=question_order)
                QuestionOption.objects.bulk_create(
                    [
                        QuestionOption(
                            question=question,
                            text=option_text,
                            is_correct=index == correct,
                            order=index,
                        )
                        for index, option_text in enumerate(options_text)
                    ]
                )

        logger.info(f"Seeded demo course {course.id} with {len(DEMO_LESSONS)} lessons")
        self.stdout.write(
            self.style.SUCCESS(
                f'Course "{title}" created with {len(DEMO_LESSONS)} lessons and {quiz_count} quizzes.'
            )
        )
