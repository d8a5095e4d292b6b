"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Local testing mode - reads model assets from disk instead of the CDN
    local_mode: bool = False

    # Local models path (used when local_mode=True)
    local_models_path: str = "local_models"

    # Optional JSON topic catalog; the built-in catalog is used when unset
    topics_file: Optional[str] = None

    # Topic loaded when a session starts
    default_topic: str = "solar-system"

    asset_timeout_seconds: float = 30.0

    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # TTS settings
    voice_enabled: bool = True
    elevenlabs_api_key: Optional[str] = None
    elevenlabs_voice_id: str = "EXAVITQu4vr4xnSDxMaL"  # Rachel voice
    elevenlabs_model_id: str = "eleven_monolingual_v1"
    tts_stability: float = 0.5
    tts_similarity_boost: float = 0.75

    @property
    def cors_origins(self) -> list[str]:
        """Return list of allowed CORS origins."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def tts_configured(self) -> bool:
        """Return True when a usable ElevenLabs key is present."""
        key = self.elevenlabs_api_key
        return bool(key) and "your_elevenlabs_api_key" not in key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
