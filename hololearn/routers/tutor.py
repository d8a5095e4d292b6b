"""API router for tutor sessions."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from hololearn.config import Settings, get_settings
from hololearn.models.schemas import (
    ErrorResponse,
    HealthResponse,
    QueryRequest,
    QuizAnswerRequest,
    TurnResponse,
    VoiceStatus,
)
from hololearn.models.topics import TopicSummary
from hololearn.services.catalog import MODEL_ASSETS
from hololearn.services.dispatch import TranscriptEntry, TurnResult, TutorSession
from hololearn.services.quiz import QuizResult
from hololearn.services.registry import load_registry
from hololearn.services.scene import HeadlessScene, SceneSnapshot
from hololearn.services.voice import VoiceSystem
from hololearn.utils.assets import AssetLoader
from hololearn.utils.tts import ElevenLabsSynthesizer

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1", tags=["tutor"])


class Services:
    """Container for shared service instances."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.registry = load_registry(settings.topics_file)
        self.scene = HeadlessScene(MODEL_ASSETS, AssetLoader(settings))
        synthesizer = ElevenLabsSynthesizer(settings) if settings.tts_configured else None
        if synthesizer is None:
            logger.info("tts_skipped", reason="no_api_key")
        self.voice = VoiceSystem(synthesizer=synthesizer, enabled=settings.voice_enabled)
        self.session = TutorSession(self.registry, self.scene, self.voice)


_services: Services | None = None


def get_services(settings: Annotated[Settings, Depends(get_settings)]) -> Services:
    """Get or create services instance."""
    global _services
    if _services is None:
        _services = Services(settings)
    return _services


def _turn_response(result: TurnResult) -> TurnResponse:
    if result.error_code == "TOPIC_NOT_FOUND":
        raise HTTPException(
            status_code=404,
            detail={"detail": f"Unknown topic: {result.topic}", "error_code": "TOPIC_NOT_FOUND"},
        )
    if not result.ok:
        raise HTTPException(
            status_code=500,
            detail={"detail": "Something went wrong", "error_code": result.error_code},
        )
    return TurnResponse.from_result(result)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    services: Annotated[Services, Depends(get_services)],
) -> HealthResponse:
    """Check service health status."""
    return HealthResponse(status="healthy", version="1.0.0", topics=len(services.registry))


@router.get("/topics", response_model=list[TopicSummary])
async def list_topics(
    services: Annotated[Services, Depends(get_services)],
) -> list[TopicSummary]:
    """List the available lessons."""
    return services.registry.list()


@router.post(
    "/topics/{topic_id}",
    response_model=TurnResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def load_topic(
    topic_id: str,
    services: Annotated[Services, Depends(get_services)],
) -> TurnResponse:
    """Switch to a topic: clear the scene and play its explanation."""
    logger.info("load_topic_request", topic=topic_id)
    result = await services.session.load_topic(topic_id)
    return _turn_response(result)


@router.post(
    "/query",
    response_model=TurnResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def ask_question(
    request: QueryRequest,
    services: Annotated[Services, Depends(get_services)],
) -> TurnResponse:
    """Answer a question about the current topic."""
    if not request.query.strip():
        raise HTTPException(
            status_code=400,
            detail={"detail": "Query is empty", "error_code": "EMPTY_QUERY"},
        )
    if services.session.current_topic is None:
        raise HTTPException(
            status_code=409,
            detail={"detail": "No topic loaded", "error_code": "NO_TOPIC_LOADED"},
        )

    logger.info("query_request", topic=services.session.current_topic)
    result = await services.session.ask(request.query)
    return _turn_response(result)


@router.post(
    "/quiz/answer",
    response_model=QuizResult,
    responses={409: {"model": ErrorResponse}},
)
async def answer_quiz(
    request: QuizAnswerRequest,
    services: Annotated[Services, Depends(get_services)],
) -> QuizResult:
    """Check an answer to the active quiz."""
    result = services.session.answer_quiz(request.option)
    if result is None:
        raise HTTPException(
            status_code=409,
            detail={"detail": "No quiz is active", "error_code": "NO_ACTIVE_QUIZ"},
        )
    return result


@router.get("/scene", response_model=SceneSnapshot)
async def get_scene(
    services: Annotated[Services, Depends(get_services)],
) -> SceneSnapshot:
    """Return loaded models and running animations."""
    return services.scene.snapshot()


@router.post("/scene/tick", response_model=SceneSnapshot)
async def tick_scene(
    services: Annotated[Services, Depends(get_services)],
    frames: Annotated[int, Query(ge=1, le=1000)] = 1,
) -> SceneSnapshot:
    """Advance animations and return the new scene state."""
    services.scene.tick(frames)
    return services.scene.snapshot()


@router.get("/transcript", response_model=list[TranscriptEntry])
async def get_transcript(
    services: Annotated[Services, Depends(get_services)],
) -> list[TranscriptEntry]:
    """Return the chat log."""
    return services.session.transcript


@router.post("/voice/toggle", response_model=VoiceStatus)
async def toggle_voice(
    services: Annotated[Services, Depends(get_services)],
) -> VoiceStatus:
    """Turn spoken narration on or off."""
    return VoiceStatus(enabled=services.voice.toggle_enabled())


@router.get("/voice/audio")
async def latest_audio(
    services: Annotated[Services, Depends(get_services)],
) -> Response:
    """Return the most recently synthesized narration clip."""
    if services.voice.last_audio is None:
        return Response(status_code=204)
    return Response(content=services.voice.last_audio, media_type="audio/mpeg")
