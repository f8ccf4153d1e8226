"""OpenAI chat completions and Whisper transcription.

The same wrapper serves OpenAI-compatible vendors (xAI Grok, Perplexity)
through the SDK's ``base_url``.
"""

from typing import Any, Dict, List, Optional

import openai
import structlog

from ..config import settings
from ..errors import VendorError

logger = structlog.get_logger(__name__)

VENDOR = "OpenAI"


class OpenAIClient:
    """AsyncOpenAI wrapper raising VendorError"""

    def __init__(
        self,
        api_key: str,
        client: Optional[openai.AsyncOpenAI] = None,
        base_url: Optional[str] = None,
        vendor: str = VENDOR,
        model: Optional[str] = None
    ):
        self.client = client or openai.AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.vendor = vendor
        self.model = model or settings.openai_model

    def _vendor_error(self, e: Exception) -> VendorError:
        if isinstance(e, openai.APIStatusError):
            return VendorError(self.vendor, e.status_code, e.message)
        if isinstance(e, openai.APITimeoutError):
            return VendorError(self.vendor, 504, str(e))
        return VendorError(self.vendor, 502, str(e))

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        max_tokens: Optional[int] = None,
        model: Optional[str] = None,
        **extra: Any
    ) -> Dict[str, Any]:
        """Chat completion, returned as the plain response dict"""
        kwargs: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
        }
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if extra:
            kwargs["extra_body"] = extra

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except openai.APIError as e:
            logger.error("Chat completion failed", vendor=self.vendor, error=str(e))
            raise self._vendor_error(e) from e

        return response.model_dump()

    async def transcribe(self, audio: bytes, filename: str = "audio.webm", mime_type: str = "audio/webm") -> Dict[str, Any]:
        """Whisper transcription with language detection"""
        try:
            result = await self.client.audio.transcriptions.create(
                model=settings.whisper_model,
                file=(filename, audio, mime_type),
                response_format="verbose_json",
            )
        except openai.APIError as e:
            logger.error("Whisper transcription failed", error=str(e))
            raise self._vendor_error(e) from e

        return {
            "text": getattr(result, "text", "") or "",
            "language": getattr(result, "language", None),
        }
