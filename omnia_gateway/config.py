"""Configuration settings for the Omnia gateway"""

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Server
    port: int = 8080
    debug: bool = False

    # CORS
    allowed_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Monitoring
    metrics_enabled: bool = True

    # Local development proxy (/claude, /openai at the root)
    enable_dev_proxy: bool = False

    # Reply language used when nothing else decides it
    default_language: str = "cs"

    # Anthropic
    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("claude_api_key", "anthropic_api_key"),
    )
    claude_model: str = "claude-sonnet-4-20250514"
    claude_max_tokens: int = 1000
    claude_history_window: int = 5
    voice_max_tokens: int = 1500
    web_search_max_tokens: int = 1500
    web_search_max_uses: int = 3

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    openai_max_tokens: int = 1000
    whisper_model: str = "whisper-1"

    # Google Gemini
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "google_api_key"),
    )
    gemini_model: str = "gemini-2.5-flash"
    gemini_max_tokens: int = 5000
    gemini_search_grounding: bool = True
    stream_word_delay_ms: int = 5

    # Google Speech
    google_api_key: str = ""
    google_tts_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_tts_api_key", "google_api_key"),
    )
    google_stt_url: str = "https://speech.googleapis.com/v1/speech:recognize"
    google_tts_url: str = "https://texttospeech.googleapis.com/v1/text:synthesize"
    google_stt_max_bytes: int = 10 * 1024 * 1024

    # ElevenLabs
    elevenlabs_api_key: str = ""
    elevenlabs_voice_id: str = "MpbYQvoTmXjHkaxtLiSh"
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    elevenlabs_stt_model: str = "scribe_v1"
    elevenlabs_tts_model: str = "eleven_multilingual_v2"
    elevenlabs_output_format: str = "mp3_44100_128"
    elevenlabs_stt_max_bytes: int = 1024 * 1024 * 1024

    elevenlabs_sts_model: str = "eleven_multilingual_sts_v2"
    elevenlabs_sts_max_bytes: int = 25 * 1024 * 1024

    # xAI Grok (OpenAI-compatible)
    grok_api_key: str = ""
    grok_base_url: str = "https://api.x.ai/v1"
    grok_model: str = "grok-3"
    grok_max_tokens: int = 2500
    grok_history_window: int = 5
    grok_word_delay_ms: int = 8
    grok_search_pause_ms: int = 800

    # Perplexity (OpenAI-compatible)
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "sonar-pro"
    sonar_model: str = "sonar"

    # Google Custom Search
    google_search_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_search_api_key", "google_api_key"),
    )
    google_cse_id: str = ""
    google_search_url: str = "https://www.googleapis.com/customsearch/v1"
    google_search_results: int = 5

    # Audio validation
    min_audio_bytes: int = 1000

    # HTTP pool
    http_connect_timeout: float = 5.0
    http_read_timeout: float = 60.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance"""
    return Settings()


settings = get_settings()
