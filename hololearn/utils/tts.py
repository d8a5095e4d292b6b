"""ElevenLabs text-to-speech client."""

import httpx
import structlog

from hololearn.config import Settings

logger = structlog.get_logger()

ELEVENLABS_URL = "https://api.elevenlabs.io/v1/text-to-speech"


class TTSError(Exception):
    """Raised when text-to-speech synthesis fails."""

    pass


class ElevenLabsSynthesizer:
    """Converts narration text to MP3 audio."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def synthesize(self, text: str) -> bytes:
        """Synthesize speech for the given text.

        Raises:
            TTSError: If the API is unreachable or rejects the request
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{ELEVENLABS_URL}/{self.settings.elevenlabs_voice_id}",
                    headers={
                        "Accept": "audio/mpeg",
                        "Content-Type": "application/json",
                        "xi-api-key": self.settings.elevenlabs_api_key or "",
                    },
                    json={
                        "text": text,
                        "model_id": self.settings.elevenlabs_model_id,
                        "voice_settings": {
                            "stability": self.settings.tts_stability,
                            "similarity_boost": self.settings.tts_similarity_boost,
                        },
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logger.error("tts_request_failed", error=str(e))
            raise TTSError(f"TTS request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "tts_api_error",
                status=response.status_code,
                body=response.text[:200],
            )
            raise TTSError(f"TTS API returned {response.status_code}")

        logger.debug("audio_synthesized", chars=len(text), size=len(response.content))
        return response.content
