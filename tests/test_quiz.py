"""Tests for hololearn.services.quiz."""

import pytest

from hololearn.models.topics import QuizSpec
from hololearn.services.quiz import QuizEngine, grade


@pytest.fixture
def quiz() -> QuizSpec:
    return QuizSpec(
        question="How many chambers does the human heart have?",
        options=["2", "3", "4", "5"],
        correct_answer="4",
        correct_feedback="That's right!",
        incorrect_feedback="Actually, four.",
    )


def test_no_active_quiz_returns_none() -> None:
    assert QuizEngine().check_answer("4") is None


def test_surface_exposes_question_and_options(quiz: QuizSpec) -> None:
    surface = QuizEngine().create_quiz(quiz)
    assert surface.question == quiz.question
    assert surface.options == ["2", "3", "4", "5"]


def test_correct_answer(quiz: QuizSpec) -> None:
    surface = QuizEngine().create_quiz(quiz)
    result = surface.on_answer("4")
    assert result.is_correct is True
    assert result.feedback == "That's right!"


def test_incorrect_answer(quiz: QuizSpec) -> None:
    engine = QuizEngine()
    engine.create_quiz(quiz)
    result = engine.check_answer("2")
    assert result.is_correct is False
    assert result.correct_answer == "4"
    assert result.feedback == "Actually, four."


def test_clear_removes_quiz(quiz: QuizSpec) -> None:
    engine = QuizEngine()
    engine.create_quiz(quiz)
    engine.clear()
    assert engine.check_answer("4") is None


def test_surface_answers_its_own_quiz(quiz: QuizSpec) -> None:
    engine = QuizEngine()
    surface = engine.create_quiz(quiz)
    engine.create_quiz(QuizSpec(
        question="What keeps Earth in orbit around the Sun?",
        options=["Gravity", "Solar wind"],
        correct_answer="Gravity",
        correct_feedback="Correct!",
        incorrect_feedback="Not quite.",
    ))

    result = surface.on_answer("4")

    assert result.is_correct is True
    assert result.correct_answer == "4"
    assert engine.check_answer("4").is_correct is False


def test_surface_uses_given_answer_path(quiz: QuizSpec) -> None:
    seen = []

    def answer(spec: QuizSpec, selected: str):
        seen.append((spec.question, selected))
        return grade(spec, selected)

    surface = QuizEngine().create_quiz(quiz, answer)

    assert surface.on_answer("3").is_correct is False
    assert seen == [(quiz.question, "3")]
