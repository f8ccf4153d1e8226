"""Voice-to-voice routes: the spoken-answer pipeline and the voice changer"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
import structlog

from ..audio import size_kb
from ..config import settings
from ..dependencies import get_claude, get_elevenlabs
from ..errors import GatewayError, VendorError
from ..messages import localize
from ..models import VoicePipelineRequest
from ..services.voice_pipeline import run_voice_pipeline
from ..vendors.anthropic_chat import ClaudeClient
from ..vendors.elevenlabs import ElevenLabsClient
from .speech import read_audio

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/elevenlabs-voice-pipeline")
async def elevenlabs_voice_pipeline(
    body: VoicePipelineRequest,
    elevenlabs: ElevenLabsClient = Depends(get_elevenlabs),
    claude: ClaudeClient = Depends(get_claude)
):
    """Recorded question in, spoken answer out"""
    logger.info("Voice pipeline started",
                history=len(body.conversation_history),
                language_hint=body.language_hint,
                streaming=body.streaming)
    try:
        return await run_voice_pipeline(body, elevenlabs, claude)
    except GatewayError:
        raise
    except Exception as e:
        logger.error("Voice pipeline error", error=str(e))
        raise GatewayError(500, "Pipeline failed", localize("pipeline_failed"), details=str(e))


def voice_change_failure(e: VendorError) -> GatewayError:
    if e.status_code == 401:
        message = localize("invalid_api_key")
    elif e.status_code == 422:
        message = localize("sts_unsupported_format")
    elif e.status_code == 429:
        message = localize("quota_exceeded")
    else:
        message = localize("sts_failed")
    return GatewayError(
        e.status_code,
        f"Voice-to-Voice API error: {e.status_code}",
        message,
        details=e.details,
        retryable=e.retryable,
    )


@router.post("/voice-to-voice")
async def voice_to_voice(request: Request, elevenlabs: ElevenLabsClient = Depends(get_elevenlabs)):
    """Recorded speech re-voiced with the Omnia voice; the body is the raw audio"""
    audio = await read_audio(request, settings.elevenlabs_sts_max_bytes)

    try:
        converted = await elevenlabs.speech_to_speech(audio)
    except VendorError as e:
        raise voice_change_failure(e)

    logger.info("Voice transformation succeeded", input_kb=size_kb(audio), output_kb=size_kb(converted))

    return Response(
        content=converted,
        media_type="audio/mpeg",
        headers={
            "Cache-Control": "no-cache",
            "X-Voice-Transform": "elevenlabs_vtv",
            "X-Original-Size": str(size_kb(audio)),
            "X-Output-Size": str(size_kb(converted)),
        },
    )
