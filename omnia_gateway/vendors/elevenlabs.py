"""ElevenLabs speech-to-text, text-to-speech and voice changer over HTTP"""

import json
from typing import Any, Dict, Optional

import httpx
import structlog

from ..config import settings
from ..utils.http_client import vendor_request

logger = structlog.get_logger(__name__)

VENDOR = "ElevenLabs"

STS_VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.8,
    "style": 0.3,
    "use_speaker_boost": False,
}


class ElevenLabsClient:
    """Thin async client for the ElevenLabs REST API"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: Optional[str] = None
    ):
        self.http = http_client
        self.api_key = api_key
        self.base_url = (base_url or settings.elevenlabs_base_url).rstrip("/")

    def _tts_payload(
        self,
        text: str,
        model_id: Optional[str],
        voice_settings: Optional[Dict[str, Any]],
        **extra: Any
    ) -> Dict[str, Any]:
        payload = {
            "text": text,
            "model_id": model_id or settings.elevenlabs_tts_model,
        }
        if voice_settings is not None:
            payload["voice_settings"] = voice_settings
        payload.update(extra)
        return payload

    async def transcribe(
        self,
        audio: bytes,
        filename: str,
        mime_type: str,
        language_code: Optional[str] = None,
        **form_fields: Any
    ) -> Dict[str, Any]:
        """Upload audio to /speech-to-text and return the vendor JSON"""
        data = {
            "model_id": settings.elevenlabs_stt_model,
            "enable_logging": "false",
            "timestamps_granularity": "word",
        }
        data.update({key: str(value) for key, value in form_fields.items()})
        if language_code:
            data["language_code"] = language_code

        logger.info("Sending audio to ElevenLabs STT",
                    audio_bytes=len(audio),
                    mime_type=mime_type,
                    language_hint=language_code)

        response = await vendor_request(
            self.http,
            VENDOR,
            "POST",
            f"{self.base_url}/speech-to-text",
            headers={"xi-api-key": self.api_key},
            data=data,
            files={"file": (filename, audio, mime_type)},
        )
        return response.json()

    async def synthesize(
        self,
        text: str,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
        voice_settings: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """Buffered text-to-speech, returns MP3 bytes"""
        voice_id = voice_id or settings.elevenlabs_voice_id
        response = await vendor_request(
            self.http,
            VENDOR,
            "POST",
            f"{self.base_url}/text-to-speech/{voice_id}",
            headers={
                "Accept": "audio/mpeg",
                "xi-api-key": self.api_key,
            },
            json=self._tts_payload(text, model_id, voice_settings),
        )
        logger.info("ElevenLabs TTS succeeded",
                    voice_id=voice_id,
                    audio_kb=round(len(response.content) / 1024))
        return response.content

    async def speech_to_speech(
        self,
        audio: bytes,
        voice_id: Optional[str] = None,
        filename: str = "input.webm",
        mime_type: str = "audio/webm"
    ) -> bytes:
        """Re-voice recorded speech with the Omnia voice, returns MP3 bytes"""
        voice_id = voice_id or settings.elevenlabs_voice_id
        data = {
            "model_id": settings.elevenlabs_sts_model,
            "voice_settings": json.dumps(STS_VOICE_SETTINGS),
            "remove_background_noise": "true",
            "optimize_streaming_latency": "1",
            "output_format": settings.elevenlabs_output_format,
        }

        logger.info("Sending audio to ElevenLabs voice changer", voice_id=voice_id, audio_bytes=len(audio))

        response = await vendor_request(
            self.http,
            VENDOR,
            "POST",
            f"{self.base_url}/speech-to-speech/{voice_id}",
            headers={"xi-api-key": self.api_key},
            data=data,
            files={"audio": (filename, audio, mime_type)},
        )
        return response.content

    async def open_speech_stream(
        self,
        text: str,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
        voice_settings: Optional[Dict[str, Any]] = None,
        language_code: Optional[str] = None,
        output_format: Optional[str] = None,
        enable_ssml_parsing: bool = False
    ) -> httpx.Response:
        """Start a streaming synthesis.

        Returns the open response with its body unread; the caller must
        ``aclose()`` it once the audio has been relayed.
        """
        voice_id = voice_id or settings.elevenlabs_voice_id
        payload = self._tts_payload(
            text,
            model_id,
            voice_settings,
            output_format=output_format or settings.elevenlabs_output_format,
        )
        if language_code:
            payload["language_code"] = language_code
        if enable_ssml_parsing:
            payload["enable_ssml_parsing"] = True

        return await vendor_request(
            self.http,
            VENDOR,
            "POST",
            f"{self.base_url}/text-to-speech/{voice_id}/stream",
            stream=True,
            headers={
                "Accept": "audio/mpeg",
                "xi-api-key": self.api_key,
            },
            json=payload,
        )
