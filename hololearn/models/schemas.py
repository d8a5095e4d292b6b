"""Pydantic request/response models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from hololearn.services.dispatch import TurnResult
from hololearn.services.executor import ActionOutcome


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str = "1.0.0"
    topics: int = 0


class ErrorDetail(BaseModel):
    """Error message and machine-readable code."""

    detail: str
    error_code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response, as produced by HTTPException with a dict detail."""

    detail: ErrorDetail


class QueryRequest(BaseModel):
    """A free-text question about the current topic."""

    query: str = Field(description="User question, typed or transcribed")


class QuizAnswerRequest(BaseModel):
    """An answer to the active quiz."""

    option: str


class QuizView(BaseModel):
    """Quiz as shown to the user, without the answer."""

    question: str
    options: list[str]


class TurnResponse(BaseModel):
    """Result of a tutor turn."""

    topic: str
    intent: str
    narration: str
    outcomes: list[ActionOutcome]
    quiz: Optional[QuizView] = None

    @classmethod
    def from_result(cls, result: TurnResult) -> "TurnResponse":
        quiz = None
        if result.quiz is not None:
            quiz = QuizView(question=result.quiz.question, options=result.quiz.options)
        return cls(
            topic=result.topic,
            intent=result.intent,
            narration=result.narration,
            outcomes=result.outcomes,
            quiz=quiz,
        )


class VoiceStatus(BaseModel):
    """Whether narration is spoken aloud."""

    enabled: bool
