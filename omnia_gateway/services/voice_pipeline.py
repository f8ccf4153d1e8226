"""
Voice-to-voice pipeline: ElevenLabs STT -> Claude -> ElevenLabs TTS.

Steps run strictly in order and the first failure ends the request with an
error envelope. Nothing is retried.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Dict, List
from urllib.parse import quote

from fastapi.responses import Response, StreamingResponse
from starlette.background import BackgroundTask
import structlog

from ..config import settings
from ..errors import GatewayError, VendorError
from ..messages import localize
from ..models import ChatMessage, VoicePipelineRequest
from ..prompts import voice_prompt
from ..text.language import detect_transcript_language
from ..text.speech_text import preprocess_for_tts
from ..utils.logging import preview
from ..vendors.anthropic_chat import ClaudeClient, text_of
from ..vendors.elevenlabs import ElevenLabsClient

logger = structlog.get_logger(__name__)

PIPELINE_NAME = "elevenlabs_voice_complete"


@dataclass
class Transcript:
    text: str
    language: str


def decode_audio(audio_data: str) -> bytes:
    if not audio_data:
        raise GatewayError(400, "Audio data required", localize("audio_required"))
    try:
        return base64.b64decode(audio_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise GatewayError(400, "Invalid audio data", localize("audio_invalid"), details=str(e))


def header_value(text: str) -> str:
    """URL-encode text for a response header the way encodeURIComponent does"""
    return quote(text, safe="!~*'()")


def claude_history(history: List[ChatMessage], user_text: str) -> List[Dict[str, str]]:
    messages = [
        {"role": "user" if message.is_user else "assistant", "content": message.body}
        for message in history
        if message.body
    ]
    messages.append({"role": "user", "content": user_text})
    return messages


async def transcribe(elevenlabs: ElevenLabsClient, audio: bytes, language_hint: str = None) -> Transcript:
    try:
        result = await elevenlabs.transcribe(
            audio,
            filename="audio.webm",
            mime_type="audio/webm",
            language_code=language_hint,
        )
    except VendorError as e:
        raise GatewayError(500, "Speech recognition failed", localize("speech_not_recognised"), details=e.details)
    except ValueError as e:
        raise GatewayError(500, "Speech recognition failed", localize("speech_not_recognised"), details=str(e), retryable=True)

    text = (result.get("text") or "").strip()
    if not text:
        raise GatewayError(400, "Empty transcription", localize("empty_transcription"))

    language = detect_transcript_language(text, result.get("language_code"))
    logger.info("Pipeline STT succeeded", text=preview(text), language=language)
    return Transcript(text=text, language=language)


async def answer(claude: ClaudeClient, transcript: Transcript, history: List[ChatMessage]) -> str:
    try:
        message = await claude.create_message(
            claude_history(history, transcript.text),
            system=voice_prompt(transcript.language),
            max_tokens=settings.voice_max_tokens,
        )
    except VendorError as e:
        raise GatewayError(500, "AI response failed", localize("ai_failed"), details=e.details)

    reply = text_of(message)
    if not reply:
        raise GatewayError(500, "Empty AI response", localize("ai_empty"))

    logger.info("Pipeline Claude succeeded", response=preview(reply), language=transcript.language)
    return reply


async def run_voice_pipeline(
    request: VoicePipelineRequest,
    elevenlabs: ElevenLabsClient,
    claude: ClaudeClient
) -> Response:
    """Run the whole pipeline and return the synthesized answer as audio/mpeg"""
    audio = decode_audio(request.audio_data)
    transcript = await transcribe(elevenlabs, audio, request.language_hint)
    reply = await answer(claude, transcript, request.conversation_history)

    try:
        speech = await elevenlabs.open_speech_stream(
            preprocess_for_tts(reply),
            voice_settings=request.voice_settings.model_dump(exclude_none=True),
        )
    except VendorError as e:
        raise GatewayError(500, "Speech synthesis failed", localize("speech_synthesis_failed"), details=e.details)

    headers = {
        "X-User-Text": header_value(transcript.text),
        "X-AI-Response": header_value(reply),
        "X-Language": transcript.language,
        "X-Pipeline": PIPELINE_NAME,
    }

    if request.streaming:
        logger.info("Pipeline TTS streaming", language=transcript.language)
        return StreamingResponse(
            speech.aiter_bytes(),
            media_type="audio/mpeg",
            headers=headers,
            background=BackgroundTask(speech.aclose),
        )

    try:
        body = await speech.aread()
    finally:
        await speech.aclose()

    logger.info("Pipeline TTS buffered", audio_kb=round(len(body) / 1024), language=transcript.language)
    return Response(content=body, media_type="audio/mpeg", headers=headers)
