"""Upstream AI vendor clients"""

from .anthropic_chat import ClaudeClient
from .elevenlabs import ElevenLabsClient
from .gemini import GeminiClient
from .google_search import GoogleSearchClient
from .google_speech import GoogleSpeechClient
from .openai_chat import OpenAIClient

__all__ = [
    "ClaudeClient",
    "ElevenLabsClient",
    "GeminiClient",
    "GoogleSearchClient",
    "GoogleSpeechClient",
    "OpenAIClient",
]
