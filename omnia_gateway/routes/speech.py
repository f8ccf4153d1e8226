"""Speech-to-text routes. The request body is the raw recorded audio."""

from fastapi import APIRouter, Depends, Request
import structlog

from ..audio import audio_filename, detect_audio_mime_type, format_limit, size_kb
from ..config import settings
from ..dependencies import get_elevenlabs, get_google_stt, get_openai
from ..errors import GatewayError, VendorError, speech_error_message
from ..messages import localize
from ..models import TranscriptionDetails, TranscriptionResult
from ..text.language import detect_transcript_language
from ..text.speech_text import postprocess_transcription
from ..utils.logging import preview
from ..vendors.elevenlabs import ElevenLabsClient
from ..vendors.google_speech import GoogleSpeechClient
from ..vendors.openai_chat import OpenAIClient

logger = structlog.get_logger(__name__)
router = APIRouter()


async def read_audio(request: Request, max_bytes: int) -> bytes:
    """Request body checked against the minimum and the vendor's maximum size"""
    audio = await request.body()

    if not audio:
        raise GatewayError(400, "No audio data", localize("no_audio"))

    logger.info("Audio data received", size=len(audio), size_kb=size_kb(audio))

    if len(audio) < settings.min_audio_bytes:
        logger.warning("Audio file too small, likely silence", size=len(audio))
        raise GatewayError(400, "Audio too short", localize("audio_too_short"))

    if len(audio) > max_bytes:
        logger.warning("Audio file too large", size=len(audio), limit=max_bytes)
        raise GatewayError(400, "Audio too large", localize("audio_too_large", limit=format_limit(max_bytes)))

    return audio


def empty_transcription() -> GatewayError:
    return GatewayError(
        400,
        "Empty transcription",
        localize("empty_transcription"),
        details=localize("speak_louder"),
    )


def stt_failure(e: VendorError, error: str, service: str) -> GatewayError:
    return GatewayError(
        e.status_code,
        error,
        speech_error_message(e.status_code, service),
        details=e.details,
        retryable=e.retryable,
    )


def unreadable_transcription(e: ValueError, service: str) -> GatewayError:
    """A 2xx vendor answer whose body is not JSON"""
    logger.error("Unreadable transcription response", service=service, error=str(e))
    return GatewayError(
        502,
        "Speech recognition failed",
        localize("transcription_failed", service=service),
        details=str(e),
        retryable=True,
    )


@router.post("/elevenlabs-stt", response_model=TranscriptionResult)
async def elevenlabs_stt(request: Request, elevenlabs: ElevenLabsClient = Depends(get_elevenlabs)):
    audio = await read_audio(request, settings.elevenlabs_stt_max_bytes)
    mime_type = detect_audio_mime_type(audio)

    try:
        result = await elevenlabs.transcribe(
            audio,
            audio_filename(mime_type),
            mime_type,
            tag_audio_events="true",
            diarize="false",
            temperature="0.2",
        )
    except VendorError as e:
        raise stt_failure(e, "ElevenLabs STT API failed", "ElevenLabs")
    except ValueError as e:
        raise unreadable_transcription(e, "ElevenLabs")

    text = result.get("text") or ""
    if not text.strip():
        logger.warning("ElevenLabs returned empty text")
        raise empty_transcription()

    vendor_language = result.get("language_code")
    language = detect_transcript_language(text, vendor_language)
    words = result.get("words") or []

    logger.info("ElevenLabs STT succeeded",
                text=preview(text, 100),
                text_length=len(text),
                vendor_language=vendor_language,
                language=language,
                words=len(words))

    return TranscriptionResult(
        text=postprocess_transcription(text, language),
        language=language,
        confidence=result.get("language_probability") or 0.95,
        message=localize("transcription_ok", service="ElevenLabs"),
        details=TranscriptionDetails(
            service="elevenlabs_stt",
            originalLanguage=vendor_language or "unknown",
            detectedLanguage=language,
            audioSize=size_kb(audio),
            words=words,
            originalText=text,
        ),
    )


@router.post("/google-stt", response_model=TranscriptionResult)
async def google_stt(request: Request, google: GoogleSpeechClient = Depends(get_google_stt)):
    audio = await read_audio(request, settings.google_stt_max_bytes)

    try:
        result = await google.recognize(audio)
    except VendorError as e:
        raise stt_failure(e, "Google STT API failed", "Google")
    except ValueError as e:
        raise unreadable_transcription(e, "Google")

    results = result.get("results") or []
    alternatives = results[0].get("alternatives") if results else None
    if not alternatives:
        logger.warning("Google returned empty transcription")
        raise empty_transcription()

    best = alternatives[0]
    text = best.get("transcript") or ""
    if not text.strip():
        raise empty_transcription()

    language = detect_transcript_language(text)
    logger.info("Google STT succeeded", text=preview(text, 100), language=language)

    return TranscriptionResult(
        text=postprocess_transcription(text, language),
        language=language,
        confidence=best.get("confidence") or 0.85,
        message=localize("transcription_ok", service="Google STT"),
        details=TranscriptionDetails(
            service="google_stt",
            originalLanguage="auto-detected",
            detectedLanguage=language,
            audioSize=size_kb(audio),
            words=best.get("words") or [],
            originalText=text,
        ),
    )


@router.post("/whisper")
async def whisper(request: Request, openai_client: OpenAIClient = Depends(get_openai)):
    """OpenAI Whisper transcription, returned as {success, text, language}"""
    audio = await request.body()
    if not audio:
        raise GatewayError(400, "Invalid request", localize("no_audio"))

    mime_type = detect_audio_mime_type(audio)
    try:
        result = await openai_client.transcribe(audio, audio_filename(mime_type), mime_type)
    except VendorError as e:
        raise GatewayError(
            e.status_code,
            "Whisper API error",
            localize("transcription_failed", service="Whisper"),
            details=e.details,
            extra={"status": e.status_code},
        )

    if not result["text"]:
        raise GatewayError(500, "No transcription received", localize("empty_transcription"))

    return {
        "success": True,
        "text": result["text"],
        "language": result["language"] or "unknown",
    }
