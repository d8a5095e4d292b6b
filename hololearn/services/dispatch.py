"""Tutor session: turns a topic choice or question into narration, scene and quiz."""

import asyncio
from typing import Literal, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from hololearn.models.topics import QuizSpec
from hololearn.services.executor import ActionExecutor, ActionOutcome
from hololearn.services.intent import IntentResolver
from hololearn.services.quiz import QuizEngine, QuizResult, QuizSurface, grade
from hololearn.services.registry import TopicNotFoundError, TopicRegistry
from hololearn.services.scene import SceneInterface
from hololearn.services.voice import VoiceInterface

logger = structlog.get_logger()

TEACHER = "AI Teacher"
USER = "You"

LOAD_ERROR_NOTICE = "Sorry, I encountered an error loading this topic."
QUERY_ERROR_NOTICE = "Sorry, I encountered an error processing your request."


class TranscriptEntry(BaseModel):
    """One line of the chat log."""

    sender: str
    message: str
    kind: Literal["ai", "user"]


class TurnResult(BaseModel):
    """Everything a turn produced."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    topic: Optional[str]
    intent: Optional[str] = None
    narration: Optional[str] = None
    outcomes: list[ActionOutcome] = Field(default_factory=list)
    quiz: Optional[QuizSurface] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TutorSession:
    """Runs tutor turns against one scene, one voice and one quiz.

    Only one turn runs at a time; overlapping calls wait their turn.
    """

    def __init__(
        self,
        registry: TopicRegistry,
        scene: SceneInterface,
        voice: VoiceInterface,
        resolver: Optional[IntentResolver] = None,
        executor: Optional[ActionExecutor] = None,
        quiz_engine: Optional[QuizEngine] = None,
    ):
        self.registry = registry
        self.scene = scene
        self.voice = voice
        self.resolver = resolver or IntentResolver(registry)
        self.executor = executor or ActionExecutor()
        self.quiz_engine = quiz_engine or QuizEngine()
        self.current_topic: Optional[str] = None
        self.transcript: list[TranscriptEntry] = []
        self._lock = asyncio.Lock()
        self._voice_queries: set[asyncio.Task] = set()

    async def handle_turn(
        self, topic_id: Optional[str], query: Optional[str] = None
    ) -> Optional[TurnResult]:
        """Run one turn.

        With ``query`` None this is a topic switch: the scene is cleared and the
        topic's explanation is played. Otherwise the query is answered within
        ``topic_id``. Blank queries are ignored and return None.
        """
        async with self._lock:
            if query is None:
                return await self._switch_topic(topic_id)

            query = query.strip()
            if not query:
                return None

            self._post(USER, query, "user")
            return await self._run_turn(topic_id, query, QUERY_ERROR_NOTICE)

    async def load_topic(self, topic_id: str) -> TurnResult:
        return await self.handle_turn(topic_id)

    async def ask(self, query: str) -> Optional[TurnResult]:
        """Answer a query about the current topic."""
        return await self.handle_turn(self.current_topic, query)

    def answer_quiz(self, selected: str) -> Optional[QuizResult]:
        """Check an answer to the active quiz and narrate the feedback."""
        quiz = self.quiz_engine.current_quiz
        if quiz is None:
            return None
        return self._answer(quiz, selected)

    def _answer(self, quiz: QuizSpec, selected: str) -> QuizResult:
        result = grade(quiz, selected)
        self._post(TEACHER, result.feedback, "ai")
        prefix = "Correct! " if result.is_correct else "Incorrect. "
        self._speak(prefix + result.feedback)
        logger.info("quiz_answered", selected=selected, correct=result.is_correct)
        return result

    def listen(self) -> bool:
        """Take the next spoken query from the microphone.

        Returns:
            False if speech recognition is unavailable
        """
        return self.voice.start_listening(self._on_transcript)

    def _on_transcript(self, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self.ask(text))
        self._voice_queries.add(task)
        task.add_done_callback(self._voice_queries.discard)

    async def _switch_topic(self, topic_id: Optional[str]) -> TurnResult:
        try:
            topic = self.registry.get(topic_id)
        except TopicNotFoundError as e:
            return self._abort(topic_id, e, "TOPIC_NOT_FOUND", LOAD_ERROR_NOTICE)

        self.current_topic = topic.id
        self.scene.clear_all()
        self.quiz_engine.clear()
        logger.info("topic_loading", topic=topic.id)
        self._post(TEACHER, f"Loading {topic.name} lesson...", "ai")

        return await self._run_turn(topic.id, "explain", LOAD_ERROR_NOTICE)

    async def _run_turn(self, topic_id: Optional[str], query: str, notice: str) -> TurnResult:
        try:
            bundle = self.resolver.resolve(topic_id, query)
        except TopicNotFoundError as e:
            return self._abort(topic_id, e, "TOPIC_NOT_FOUND", notice)
        except Exception as e:
            logger.exception("turn_resolution_failed", topic=topic_id)
            return self._abort(topic_id, e, "TURN_FAILED", notice)

        response = bundle.response
        self._post(TEACHER, response.narration, "ai")
        self._speak(response.narration)

        outcomes = await self.executor.execute(response.actions, self.scene)

        quiz = None
        if response.quiz is not None:
            quiz = self.quiz_engine.create_quiz(response.quiz, self._answer)

        logger.info(
            "turn_complete",
            topic=bundle.topic,
            intent=bundle.intent,
            actions=len(outcomes),
            failed_actions=sum(1 for outcome in outcomes if not outcome.ok),
            quiz=quiz is not None,
        )
        return TurnResult(
            topic=bundle.topic,
            intent=bundle.intent,
            narration=response.narration,
            outcomes=outcomes,
            quiz=quiz,
        )

    def _abort(
        self, topic_id: Optional[str], error: Exception, code: str, notice: str
    ) -> TurnResult:
        logger.warning("turn_aborted", topic=topic_id, error_code=code, error=str(error))
        self._post(TEACHER, notice, "ai")
        return TurnResult(topic=topic_id, error=str(error), error_code=code)

    def _speak(self, text: str) -> None:
        try:
            self.voice.speak(text)
        except Exception as e:
            logger.warning("speech_unavailable", error=str(e))

    def _post(self, sender: str, message: str, kind: Literal["ai", "user"]) -> None:
        self.transcript.append(TranscriptEntry(sender=sender, message=message, kind=kind))
