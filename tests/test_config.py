"""Tests for settings and prompt helpers"""

from datetime import datetime

from omnia_gateway.config import Settings
from omnia_gateway.prompts import VOICE_PROMPTS, voice_prompt, web_search_prompt

KEY_VARIABLES = [
    "CLAUDE_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY",
    "GOOGLE_API_KEY", "GOOGLE_TTS_API_KEY", "ELEVENLABS_API_KEY",
    "GOOGLE_SEARCH_API_KEY", "GROK_API_KEY", "PERPLEXITY_API_KEY",
]


def clear_keys(monkeypatch):
    for name in KEY_VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clear_keys(monkeypatch)
    settings = Settings(_env_file=None)
    assert settings.anthropic_api_key == ""
    assert settings.claude_history_window == 5
    assert settings.min_audio_bytes == 1000
    assert settings.default_language == "cs"
    assert settings.grok_api_key == ""
    assert settings.grok_base_url == "https://api.x.ai/v1"
    assert settings.elevenlabs_sts_max_bytes == 25 * 1024 * 1024


def test_claude_key_alias(monkeypatch):
    clear_keys(monkeypatch)
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-test")
    assert Settings(_env_file=None).anthropic_api_key == "sk-ant-test"


def test_google_key_shared_by_gemini_and_tts(monkeypatch):
    clear_keys(monkeypatch)
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    settings = Settings(_env_file=None)
    assert settings.google_api_key == "g-key"
    assert settings.gemini_api_key == "g-key"
    assert settings.google_tts_api_key == "g-key"
    assert settings.google_search_api_key == "g-key"


def test_dedicated_tts_key_wins(monkeypatch):
    clear_keys(monkeypatch)
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    monkeypatch.setenv("GOOGLE_TTS_API_KEY", "tts-key")
    assert Settings(_env_file=None).google_tts_api_key == "tts-key"


def test_voice_prompt_fallback():
    assert voice_prompt("en") == VOICE_PROMPTS["en"]
    assert voice_prompt("de") == VOICE_PROMPTS["cs"]
    assert voice_prompt(None) == VOICE_PROMPTS["cs"]


def test_web_search_prompt_dates():
    today = datetime(2025, 3, 7)
    assert web_search_prompt("cs", today).endswith("Today: 7. 3. 2025")
    assert web_search_prompt("en", today).endswith("Today: 3/7/2025")
    assert web_search_prompt("ro", today).endswith("Astăzi: 07.03.2025")
