"""Voice output and input for the tutor."""

import asyncio
from collections.abc import Callable
from typing import Optional, Protocol

import structlog

logger = structlog.get_logger()


class VoiceUnavailableError(Exception):
    """Raised when speech is requested and no speech capability exists."""

    pass


class Synthesizer(Protocol):
    async def synthesize(self, text: str) -> bytes: ...


class Recognizer(Protocol):
    async def listen(self) -> str: ...


class VoiceInterface(Protocol):
    """What the dispatch loop needs from a voice system."""

    def speak(self, text: str) -> None: ...

    def toggle_enabled(self) -> bool: ...

    def start_listening(self, on_result: Callable[[str], None]) -> bool: ...

    def stop_listening(self) -> None: ...


class VoiceSystem:
    """Speaks narration and listens for spoken queries.

    ``speak`` never blocks the caller: it cancels whatever is being spoken and
    schedules synthesis of the new text on the running loop. Without a
    synthesizer, or when voice is disabled, speaking does nothing.
    """

    def __init__(
        self,
        synthesizer: Optional[Synthesizer] = None,
        recognizer: Optional[Recognizer] = None,
        enabled: bool = True,
    ):
        self.synthesizer = synthesizer
        self.recognizer = recognizer
        self.is_voice_enabled = enabled
        self.is_listening = False
        self.last_audio: Optional[bytes] = None
        self.utterance: Optional[asyncio.Task] = None
        self._recognition: Optional[asyncio.Task] = None

    def speak(self, text: str) -> None:
        if not self.is_voice_enabled:
            return

        if self.synthesizer is None:
            logger.debug("speech_skipped", reason="no_synthesizer")
            return

        if self.utterance is not None and not self.utterance.done():
            self.utterance.cancel()

        try:
            self.utterance = asyncio.get_running_loop().create_task(self._utter(text))
        except RuntimeError as e:
            raise VoiceUnavailableError("Speech needs a running event loop") from e

    async def _utter(self, text: str) -> None:
        try:
            self.last_audio = await self.synthesizer.synthesize(text)
            logger.debug("speech_ready", chars=len(text))
        except asyncio.CancelledError:
            logger.debug("speech_cancelled")
            raise
        except Exception as e:
            logger.error("speech_failed", error=str(e))

    def toggle_enabled(self) -> bool:
        self.is_voice_enabled = not self.is_voice_enabled
        logger.info("voice_toggled", enabled=self.is_voice_enabled)
        return self.is_voice_enabled

    def start_listening(self, on_result: Callable[[str], None]) -> bool:
        """Start one recognition pass, feeding the transcript to ``on_result``.

        Returns:
            False if speech recognition is not supported
        """
        if self.recognizer is None:
            logger.warning("speech_recognition_unsupported")
            return False

        self.stop_listening()
        self.is_listening = True
        self._recognition = asyncio.get_running_loop().create_task(
            self._listen(on_result)
        )
        return True

    async def _listen(self, on_result: Callable[[str], None]) -> None:
        try:
            transcript = await self.recognizer.listen()
            on_result(transcript)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("speech_recognition_error", error=str(e))
        finally:
            self.is_listening = False

    def stop_listening(self) -> None:
        if self._recognition is not None and not self._recognition.done():
            self._recognition.cancel()
        self.is_listening = False
