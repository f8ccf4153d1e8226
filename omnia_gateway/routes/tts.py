"""Text-to-speech routes returning audio/mpeg"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse
from starlette.background import BackgroundTask
import structlog

from ..dependencies import get_elevenlabs, get_google_tts
from ..errors import GatewayError, VendorError
from ..messages import localize
from ..models import ElevenLabsTTSRequest, GoogleTTSRequest, TTSStreamRequest, VoiceRequest
from ..text.speech_text import preprocess_for_tts
from ..utils.logging import preview
from ..vendors.elevenlabs import ElevenLabsClient
from ..vendors.google_speech import GoogleSpeechClient

logger = structlog.get_logger(__name__)
router = APIRouter()

# Fixed voice and settings of the plain /voice route
OMNIA_VOICE_ID = "MpbYQvoTmXjHkaxtLiSh"
OMNIA_VOICE_SETTINGS = {
    "stability": 0.85,
    "similarity_boost": 0.9,
    "style": 0.25,
    "use_speaker_boost": True,
}

CACHED_AUDIO_HEADERS = {"Cache-Control": "public, max-age=3600"}


def require_text(text) -> str:
    if not text or not text.strip():
        raise GatewayError(400, "Text is required", localize("text_required"))
    return text


def elevenlabs_tts_error(e: VendorError) -> GatewayError:
    if e.status_code == 401:
        return GatewayError(401, "Invalid API key", localize("invalid_api_key", service="ElevenLabs"))
    if e.status_code == 429:
        return GatewayError(429, "Rate limit exceeded or quota reached", localize("quota_exceeded"))
    return GatewayError(
        e.status_code,
        f"ElevenLabs TTS API error: {e.status_code}",
        localize("tts_server_error", status=e.status_code),
        details=e.details,
    )


@router.post("/elevenlabs-tts")
async def elevenlabs_tts(body: ElevenLabsTTSRequest, elevenlabs: ElevenLabsClient = Depends(get_elevenlabs)):
    text = require_text(body.text)

    try:
        audio = await elevenlabs.synthesize(
            text,
            voice_id=body.voice_id,
            model_id=body.model_id,
            voice_settings=body.voice_settings.model_dump(exclude_none=True),
        )
    except VendorError as e:
        raise elevenlabs_tts_error(e)

    return Response(content=audio, media_type="audio/mpeg", headers=CACHED_AUDIO_HEADERS)


@router.post("/elevenlabs-tts-stream")
async def elevenlabs_tts_stream(body: TTSStreamRequest, elevenlabs: ElevenLabsClient = Depends(get_elevenlabs)):
    """Speech for chat text, relayed chunk by chunk unless stream_chunks is off"""
    text = require_text(body.text)
    processed = preprocess_for_tts(text)

    logger.info("ElevenLabs streaming TTS request",
                text_length=len(processed),
                text_preview=preview(processed),
                voice_id=body.voice_id,
                streaming=body.stream_chunks)

    try:
        speech = await elevenlabs.open_speech_stream(
            processed,
            voice_id=body.voice_id,
            model_id=body.model_id,
            voice_settings=body.voice_settings.model_dump(exclude_none=True),
            language_code=body.language_code,
            output_format=body.output_format,
            enable_ssml_parsing=body.enable_ssml_parsing,
        )
    except VendorError as e:
        raise elevenlabs_tts_error(e)

    if body.stream_chunks:
        return StreamingResponse(
            speech.aiter_bytes(),
            media_type="audio/mpeg",
            headers={"Cache-Control": "no-cache"},
            background=BackgroundTask(speech.aclose),
        )

    try:
        audio = await speech.aread()
    finally:
        await speech.aclose()

    logger.info("ElevenLabs TTS buffered", audio_kb=round(len(audio) / 1024))
    return Response(content=audio, media_type="audio/mpeg", headers=CACHED_AUDIO_HEADERS)


@router.post("/voice")
async def voice(body: VoiceRequest, elevenlabs: ElevenLabsClient = Depends(get_elevenlabs)):
    """Omnia's own voice, no preprocessing"""
    if not body.text or not body.text.strip():
        raise GatewayError(400, "No text provided", localize("text_required"))

    try:
        audio = await elevenlabs.synthesize(
            body.text,
            voice_id=OMNIA_VOICE_ID,
            voice_settings=OMNIA_VOICE_SETTINGS,
        )
    except VendorError as e:
        raise GatewayError(500, "Voice generation failed", localize("speech_synthesis_failed"), details=e.details)

    return Response(content=audio, media_type="audio/mpeg")


@router.post("/google-tts")
async def google_tts(body: GoogleTTSRequest, google: GoogleSpeechClient = Depends(get_google_tts)):
    text = require_text(body.text)

    try:
        audio = await google.synthesize(text, body.language, body.voice)
    except VendorError as e:
        raise GatewayError(
            500,
            "Google TTS failed",
            localize("tts_failed"),
            details=e.details,
            extra={"language": body.language},
        )

    logger.info("Google TTS succeeded", language=body.language, audio_kb=round(len(audio) / 1024))
    return Response(content=audio, media_type="audio/mpeg", headers=CACHED_AUDIO_HEADERS)
