"""Quiz state and answer checking."""

from collections.abc import Callable
from functools import partial
from typing import Optional

from pydantic import BaseModel, ConfigDict

from hololearn.models.topics import QuizSpec


class QuizResult(BaseModel):
    """Outcome of answering a quiz."""

    is_correct: bool
    correct_answer: str
    feedback: str


class QuizSurface(BaseModel):
    """A quiz as presented to the user, with a callback to submit an answer."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    question: str
    options: list[str]
    on_answer: Callable[[str], QuizResult]


def grade(quiz: QuizSpec, selected: str) -> QuizResult:
    """Grade an answer against a specific quiz."""
    is_correct = selected == quiz.correct_answer
    return QuizResult(
        is_correct=is_correct,
        correct_answer=quiz.correct_answer,
        feedback=quiz.correct_feedback if is_correct else quiz.incorrect_feedback,
    )


class QuizEngine:
    """Holds the quiz currently shown to the user."""

    def __init__(self):
        self.current_quiz: Optional[QuizSpec] = None

    def create_quiz(
        self,
        quiz: QuizSpec,
        answer: Optional[Callable[[QuizSpec, str], QuizResult]] = None,
    ) -> QuizSurface:
        """Make ``quiz`` current and return its surface.

        The surface always answers its own quiz, through ``answer`` when given,
        even after a later quiz replaces it as current.
        """
        self.current_quiz = quiz
        return QuizSurface(
            question=quiz.question,
            options=list(quiz.options),
            on_answer=partial(answer or grade, quiz),
        )

    def clear(self) -> None:
        self.current_quiz = None

    def check_answer(self, selected: str) -> Optional[QuizResult]:
        """Check an answer against the current quiz; None if no quiz is active."""
        if self.current_quiz is None:
            return None
        return grade(self.current_quiz, selected)
