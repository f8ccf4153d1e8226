"""FastAPI dependencies handing out the vendor clients built in the lifespan"""

from typing import Optional

from starlette.requests import HTTPConnection

from .errors import configuration_error
from .vendors import (
    ClaudeClient,
    ElevenLabsClient,
    GeminiClient,
    GoogleSearchClient,
    GoogleSpeechClient,
    OpenAIClient,
)


def _vendor(connection: HTTPConnection, attribute: str, service: str):
    client = getattr(connection.app.state, attribute, None)
    if client is None:
        raise configuration_error(service)
    return client


def get_claude(connection: HTTPConnection) -> ClaudeClient:
    return _vendor(connection, "claude", "Claude")


def get_openai(connection: HTTPConnection) -> OpenAIClient:
    return _vendor(connection, "openai", "OpenAI")


def get_perplexity(connection: HTTPConnection) -> OpenAIClient:
    return _vendor(connection, "perplexity", "Perplexity")


def get_elevenlabs(connection: HTTPConnection) -> ElevenLabsClient:
    return _vendor(connection, "elevenlabs", "ElevenLabs")


def get_google_stt(connection: HTTPConnection) -> GoogleSpeechClient:
    return _vendor(connection, "google_stt", "Google")


def get_google_tts(connection: HTTPConnection) -> GoogleSpeechClient:
    return _vendor(connection, "google_tts", "Google TTS")


def get_google_search(connection: HTTPConnection) -> GoogleSearchClient:
    return _vendor(connection, "google_search", "Google Search")


def get_gemini(connection: HTTPConnection) -> Optional[GeminiClient]:
    """Gemini routes report missing credentials inside the stream, so no error here"""
    return getattr(connection.app.state, "gemini", None)


def get_grok(connection: HTTPConnection) -> Optional[OpenAIClient]:
    """Grok reports missing credentials inside its NDJSON stream"""
    return getattr(connection.app.state, "grok", None)
