"""Shared fixtures and vendor fakes for the gateway tests"""

from typing import Any, Dict, List, Optional

import httpx
import pytest
from anthropic.types import Message, TextBlock, Usage
from fastapi.testclient import TestClient

from omnia_gateway.main import app

WEBM_AUDIO = b"\x1a\x45\xdf\xa3" + b"\x00" * 2048


def claude_message(text: str = "Ahoj, jak ti mohu pomoci?", model: str = "claude-test") -> Message:
    return Message(
        id="msg_test",
        type="message",
        role="assistant",
        model=model,
        content=[TextBlock(type="text", text=text)],
        stop_reason="end_turn",
        stop_sequence=None,
        usage=Usage(input_tokens=12, output_tokens=8),
    )


class FakeClaude:
    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [claude_message()])
        self.calls: List[Dict[str, Any]] = []

    async def create_message(self, messages, system=None, max_tokens=None, tools=None):
        self.calls.append({"messages": messages, "system": system, "max_tokens": max_tokens, "tools": tools})
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeOpenAI:
    def __init__(self, chat_response: Any = None, transcription: Any = None):
        self.chat_response = chat_response
        self.transcription = transcription
        self.chat_calls: List[Dict[str, Any]] = []

    async def chat(self, messages, max_tokens=None, model=None, **extra):
        self.chat_calls.append({"messages": messages, "max_tokens": max_tokens, "model": model, **extra})
        if isinstance(self.chat_response, Exception):
            raise self.chat_response
        return self.chat_response

    async def transcribe(self, audio, filename="audio.webm", mime_type="audio/webm"):
        if isinstance(self.transcription, Exception):
            raise self.transcription
        return self.transcription


class FakeElevenLabs:
    def __init__(self, transcription: Any = None, audio: Any = b"ID3-fake-mp3"):
        self.transcription = transcription
        self.audio = audio
        self.transcribe_calls: List[Dict[str, Any]] = []
        self.synthesize_calls: List[Dict[str, Any]] = []
        self.stream_calls: List[Dict[str, Any]] = []
        self.sts_calls: List[Dict[str, Any]] = []

    async def transcribe(self, audio, filename, mime_type, language_code=None, **form_fields):
        self.transcribe_calls.append({
            "audio": audio,
            "filename": filename,
            "mime_type": mime_type,
            "language_code": language_code,
            **form_fields,
        })
        if isinstance(self.transcription, Exception):
            raise self.transcription
        return self.transcription

    async def synthesize(self, text, voice_id=None, model_id=None, voice_settings=None):
        self.synthesize_calls.append({
            "text": text,
            "voice_id": voice_id,
            "model_id": model_id,
            "voice_settings": voice_settings,
        })
        if isinstance(self.audio, Exception):
            raise self.audio
        return self.audio

    async def speech_to_speech(self, audio, voice_id=None, filename="input.webm", mime_type="audio/webm"):
        self.sts_calls.append({"audio": audio, "voice_id": voice_id})
        if isinstance(self.audio, Exception):
            raise self.audio
        return self.audio

    async def open_speech_stream(self, text, voice_id=None, model_id=None, voice_settings=None,
                                 language_code=None, output_format=None, enable_ssml_parsing=False):
        self.stream_calls.append({
            "text": text,
            "voice_id": voice_id,
            "voice_settings": voice_settings,
            "language_code": language_code,
            "output_format": output_format,
            "enable_ssml_parsing": enable_ssml_parsing,
        })
        if isinstance(self.audio, Exception):
            raise self.audio
        return httpx.Response(200, content=self.audio)


class FakeGoogleSpeech:
    def __init__(self, recognition: Any = None, audio: Any = b"google-mp3"):
        self.recognition = recognition
        self.audio = audio
        self.synthesize_calls: List[Dict[str, Any]] = []

    async def recognize(self, audio):
        if isinstance(self.recognition, Exception):
            raise self.recognition
        return self.recognition

    async def synthesize(self, text, language="cs", voice="natural"):
        self.synthesize_calls.append({"text": text, "language": language, "voice": voice})
        if isinstance(self.audio, Exception):
            raise self.audio
        return self.audio


class FakeGoogleSearch:
    def __init__(self, results: Any = None):
        self.results = results if results is not None else []
        self.calls: List[Dict[str, Any]] = []

    async def search(self, query, language="cs", num=None):
        self.calls.append({"query": query, "language": language})
        if isinstance(self.results, Exception):
            raise self.results
        return self.results


class FakeGemini:
    """Yields the given candidate dicts, optionally failing to start or midway"""

    def __init__(self, candidates: Optional[List[Dict[str, Any]]] = None,
                 start_error: Optional[Exception] = None,
                 stream_error: Optional[Exception] = None):
        self.candidates = candidates or []
        self.start_error = start_error
        self.stream_error = stream_error
        self.calls: List[Dict[str, Any]] = []

    async def stream(self, contents, system_instruction, max_tokens=None):
        self.calls.append({"contents": contents, "system_instruction": system_instruction, "max_tokens": max_tokens})
        if self.start_error:
            raise self.start_error
        return self._iterate()

    async def _iterate(self):
        for candidate in self.candidates:
            yield candidate
        if self.stream_error:
            raise self.stream_error


def text_candidate(text: str, grounding_metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
    if grounding_metadata:
        candidate["grounding_metadata"] = grounding_metadata
    return candidate


@pytest.fixture
def client():
    """Test client without lifespan, so no vendor is configured unless overridden"""
    yield TestClient(app)
    app.dependency_overrides.clear()
