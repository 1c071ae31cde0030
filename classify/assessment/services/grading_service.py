"""
Grading Service for the Classify Platform

Turns a flat, order-dependent answer submission into a scored, durable
result:

1. Load the quiz with its ordered questions and options
2. Reject submissions whose answer count differs from the question count
3. Grade every question by comparing the submitted option index with the
   position of the option marked correct
4. Write the Submission header and one SubmissionAnswer per question in a
   single transaction

Retaking a quiz always creates a new Submission. "Latest score per lesson" is
a read-time reduction done by the progress service.

Author: Classify Development Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from django.db import DatabaseError, transaction
from django.db.models import Prefetch

from ...exceptions import AnswerCountMismatch, GradingFailed, NotFound, ValidationFailed
from ..models import Question, QuestionOption, Quiz, Submission, SubmissionAnswer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradableQuestion:
    """A question reduced to what grading needs: its options in index order."""

    question_id: int
    option_ids: Sequence[int]
    correct_flags: Sequence[bool]

    @property
    def correct_index(self) -> Optional[int]:
        """
        Position of the correct option.

        None unless exactly one option is marked correct; such a question is
        graded incorrect for every answer.
        """
        marked = [index for index, flag in enumerate(self.correct_flags) if flag]
        return marked[0] if len(marked) == 1 else None

    def chosen_option_id(self, answer: int) -> Optional[int]:
        # Negative indices must not wrap around
        if 0 <= answer < len(self.option_ids):
            return self.option_ids[answer]
        return None


@dataclass(frozen=True)
class QuestionResult:
    question_id: int
    chosen_option_id: Optional[int]
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "chosenOptionId": self.chosen_option_id,
            "isCorrect": self.is_correct,
        }


@dataclass(frozen=True)
class GradingResult:
    submission_id: int
    score: int
    total_questions: int
    results: List[QuestionResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "submissionId": self.submission_id,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "results": [result.to_dict() for result in self.results],
        }


def grade_answers(
    questions: Sequence[GradableQuestion], answers: Sequence[int]
) -> List[QuestionResult]:
    """
    Grade answers positionally against questions.

    Args:
        questions: Questions in quiz order
        answers: One option index per question, same order

    Returns:
        One QuestionResult per question

    Raises:
        AnswerCountMismatch: If the lengths differ; nothing is graded
    """
    if len(answers) != len(questions):
        raise AnswerCountMismatch(expected=len(questions), received=len(answers))

    results = []
    for question, answer in zip(questions, answers):
        correct_index = question.correct_index
        results.append(
            QuestionResult(
                question_id=question.question_id,
                chosen_option_id=question.chosen_option_id(answer),
                is_correct=correct_index is not None and answer == correct_index,
            )
        )
    return results


class GradingEngine:
    """
    Grade quiz submissions and persist them atomically.

    Example:
        >>> engine = GradingEngine()
        >>> result = engine.grade(quiz_id=3, user_id=7, answers=[0, 2, 1])
        >>> result.score, result.total_questions
        (2, 3)
    """

    def __init__(self) -> None:
        self.logger = logger

    def grade(self, quiz_id: int, user_id: int, answers: Sequence[int]) -> GradingResult:
        """
        Grade a submission for a quiz.

        Args:
            quiz_id: Quiz being answered
            user_id: Authenticated user id, trusted as is
            answers: Ordered option indices, one per question

        Returns:
            GradingResult with score, question count and per-question results

        Raises:
            NotFound: If the quiz does not exist
            ValidationFailed: If an answer is not an integer
            AnswerCountMismatch: If len(answers) != number of questions
            GradingFailed: If the write failed; nothing was persisted
        """
        _validate_answers(answers)

        quiz = self._load_quiz(quiz_id)
        questions = self._gradable_questions(quiz)
        results = grade_answers(questions, answers)
        score = sum(1 for result in results if result.is_correct)

        submission = self._persist(quiz, user_id, score, results)
        self.logger.info(
            f"Graded quiz {quiz.id} for user {user_id}: {score}/{len(questions)} "
            f"(submission {submission.id})"
        )
        return GradingResult(
            submission_id=submission.id,
            score=score,
            total_questions=len(questions),
            results=results,
        )

    def grade_for_lesson(self, lesson_id: int, user_id: int, answers: Sequence[int]) -> GradingResult:
        """Grade the quiz attached to a lesson. Raises NotFound if there is none."""
        quiz_id = Quiz.objects.filter(lesson_id=lesson_id).values_list("id", flat=True).first()
        if quiz_id is None:
            raise NotFound("Quiz not found for this lesson.")
        return self.grade(quiz_id, user_id, answers)

    def _load_quiz(self, quiz_id: int) -> Quiz:
        questions = Question.objects.order_by("order", "id").prefetch_related(
            Prefetch("options", queryset=QuestionOption.objects.order_by("order", "id"))
        )
        try:
            return Quiz.objects.prefetch_related(Prefetch("questions", queryset=questions)).get(
                pk=quiz_id
            )
        except Quiz.DoesNotExist:
            raise NotFound("Quiz not found.")

    def _gradable_questions(self, quiz: Quiz) -> List[GradableQuestion]:
        gradable = []
        for question in quiz.questions.all():
            options = list(question.options.all())
            gradable.append(
                GradableQuestion(
                    question_id=question.id,
                    option_ids=[option.id for option in options],
                    correct_flags=[option.is_correct for option in options],
                )
            )
            if gradable[-1].correct_index is None:
                self.logger.warning(
                    f"Question {question.id} of quiz {quiz.id} does not have exactly "
                    f"one correct option; it is graded incorrect"
                )
        return gradable

    def _persist(
        self, quiz: Quiz, user_id: int, score: int, results: Sequence[QuestionResult]
    ) -> Submission:
        """
        Write the submission header and detail rows as one unit.

        Any database error rolls back both and surfaces as GradingFailed, so a
        header without its answers is never observable.
        """
        try:
            with transaction.atomic():
                submission = Submission.objects.create(quiz=quiz, user_id=user_id, score=score)
                SubmissionAnswer.objects.bulk_create(
                    [
                        SubmissionAnswer(
                            submission=submission,
                            question_id=result.question_id,
                            chosen_option_id=result.chosen_option_id,
                            is_correct=result.is_correct,
                        )
                        for result in results
                    ]
                )
        except DatabaseError as e:
            self.logger.exception(f"Failed to store submission for quiz {quiz.id}, user {user_id}")
            raise GradingFailed() from e
        return submission


def _validate_answers(answers: Sequence[int]) -> None:
    if isinstance(answers, (str, bytes)) or not isinstance(answers, Sequence):
        raise ValidationFailed("Answers must be a list of option indices.")
    for answer in answers:
        if not isinstance(answer, int) or isinstance(answer, bool):
            raise ValidationFailed("Answers must be a list of option indices.")
