"""
Classify Models Registry

Imports the models of the logical submodules (users, courses, assessment) so
they are registered with Django's ORM under the single "classify" app label.

Architecture:
- users/: Profile with role
- courses/: Course, Lesson, Enrollment, UserLessonProgress
- assessment/: Quiz, Question, QuestionOption, Submission, SubmissionAnswer

Author: Classify Development Team
Version: 1.0.0
"""

from .users.models import *
from .courses.models import *
from .assessment.models import *
