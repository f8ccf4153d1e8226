"""Google Cloud Speech-to-Text and Text-to-Speech over REST with an API key"""

import base64
from typing import Any, Dict, Optional

import httpx
import structlog

from ..audio import detect_google_encoding, google_sample_rate
from ..config import settings
from ..errors import VendorError
from ..utils.http_client import vendor_request

logger = structlog.get_logger(__name__)

VENDOR = "Google"

# language -> (BCP-47 code, default voice)
VOICES = {
    "cs": ("cs-CZ", "cs-CZ-Neural2-A"),
    "en": ("en-US", "en-US-Neural2-C"),
    "ro": ("ro-RO", "ro-RO-Neural2-A"),
    "de": ("de-DE", "de-DE-Neural2-A"),
    "es": ("es-ES", "es-ES-Neural2-A"),
    "fr": ("fr-FR", "fr-FR-Neural2-A"),
    "it": ("it-IT", "it-IT-Neural2-A"),
    "pl": ("pl-PL", "pl-PL-Neural2-A"),
    "pt": ("pt-PT", "pt-PT-Neural2-A"),
    "nl": ("nl-NL", "nl-NL-Neural2-A"),
    "sv": ("sv-SE", "sv-SE-Neural2-A"),
    "da": ("da-DK", "da-DK-Neural2-A"),
    "no": ("nb-NO", "nb-NO-Neural2-A"),
    "fi": ("fi-FI", "fi-FI-Neural2-A"),
    "hu": ("hu-HU", "hu-HU-Neural2-A"),
    "sk": ("sk-SK", "sk-SK-Neural2-A"),
    "ja": ("ja-JP", "ja-JP-Neural2-B"),
    "ko": ("ko-KR", "ko-KR-Neural2-A"),
    "zh": ("zh-CN", "zh-CN-Neural2-A"),
    "zh-tw": ("zh-TW", "zh-TW-Neural2-A"),
    "hi": ("hi-IN", "hi-IN-Neural2-A"),
    "th": ("th-TH", "th-TH-Neural2-A"),
    "vi": ("vi-VN", "vi-VN-Neural2-A"),
    "ar": ("ar-XA", "ar-XA-Neural2-A"),
    "ru": ("ru-RU", "ru-RU-Neural2-A"),
    "tr": ("tr-TR", "tr-TR-Neural2-A"),
    "he": ("he-IL", "he-IL-Neural2-A"),
    "uk": ("uk-UA", "uk-UA-Neural2-A"),
    "bg": ("bg-BG", "bg-BG-Neural2-A"),
    "hr": ("hr-HR", "hr-HR-Neural2-A"),
    "sr": ("sr-RS", "sr-RS-Neural2-A"),
    "en-gb": ("en-GB", "en-GB-Neural2-A"),
    "en-au": ("en-AU", "en-AU-Neural2-A"),
    "en-in": ("en-IN", "en-IN-Neural2-A"),
    "es-mx": ("es-MX", "es-MX-Neural2-A"),
    "es-ar": ("es-AR", "es-AR-Neural2-A"),
    "pt-br": ("pt-BR", "pt-BR-Neural2-A"),
}


def resolve_voice(language: str, voice: Optional[str] = "natural") -> Dict[str, str]:
    """Pick the Google voice for a language, Czech when the language is unknown.

    Any voice other than "natural" is a suffix such as "Wavenet-B" appended
    to the language code.
    """
    code, default_voice = VOICES.get((language or "cs").lower(), VOICES["cs"])
    name = default_voice if not voice or voice == "natural" else f"{code}-{voice}"
    return {"languageCode": code, "name": name}


class GoogleSpeechClient:
    """Google Speech REST calls"""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        stt_api_key: str,
        tts_api_key: str
    ):
        self.http = http_client
        self.stt_api_key = stt_api_key
        self.tts_api_key = tts_api_key

    async def recognize(self, audio: bytes) -> Dict[str, Any]:
        """Synchronous recognition, Czech first with English and Romanian alternatives"""
        encoding = detect_google_encoding(audio)
        sample_rate = google_sample_rate(encoding)

        payload = {
            "config": {
                "encoding": encoding,
                "sampleRateHertz": sample_rate,
                "languageCode": "cs-CZ",
                "alternativeLanguageCodes": ["en-US", "ro-RO"],
                "enableAutomaticPunctuation": True,
                "enableWordTimeOffsets": True,
                "enableWordConfidence": True,
                "maxAlternatives": 1,
                "profanityFilter": False,
                "useEnhanced": True,
                "model": "latest_long",
            },
            "audio": {"content": base64.b64encode(audio).decode("ascii")},
        }

        logger.info("Sending audio to Google STT",
                    encoding=encoding,
                    sample_rate=sample_rate,
                    audio_bytes=len(audio))

        response = await vendor_request(
            self.http,
            VENDOR,
            "POST",
            settings.google_stt_url,
            params={"key": self.stt_api_key},
            json=payload,
        )
        return response.json()

    async def _synthesize_once(self, text: str, voice: Dict[str, str], audio_config: Dict[str, Any]) -> bytes:
        response = await vendor_request(
            self.http,
            VENDOR,
            "POST",
            settings.google_tts_url,
            params={"key": self.tts_api_key},
            json={"input": {"text": text}, "voice": voice, "audioConfig": audio_config},
        )
        content = response.json().get("audioContent")
        if not content:
            raise VendorError(VENDOR, 502, "No audio content received from Google TTS")
        return base64.b64decode(content)

    async def synthesize(self, text: str, language: str = "cs", voice: Optional[str] = "natural") -> bytes:
        """MP3 synthesis; a failing Neural2 voice is retried once with its Standard twin"""
        selected = resolve_voice(language, voice)
        try:
            return await self._synthesize_once(text, selected, {
                "audioEncoding": "MP3",
                "speakingRate": 1.0,
                "pitch": 0.0,
                "volumeGainDb": 0.0,
                "effectsProfileId": ["headphone-class-device"],
            })
        except VendorError:
            if "Neural2" not in selected["name"]:
                raise
            fallback = dict(selected, name=selected["name"].replace("Neural2", "Standard"))
            logger.warning("Google TTS Neural2 voice failed, retrying with Standard",
                           voice=selected["name"],
                           fallback=fallback["name"])
            return await self._synthesize_once(text, fallback, {
                "audioEncoding": "MP3",
                "speakingRate": 1.0,
                "pitch": 0.0,
            })
