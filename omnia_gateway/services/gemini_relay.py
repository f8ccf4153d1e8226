"""Relay of a Gemini stream as newline-delimited JSON events"""

import asyncio
import json
from typing import Any, AsyncIterator, Dict

import structlog

from ..config import settings
from ..messages import localize
from ..models import GeminiRequest
from ..prompts import GEMINI_SYSTEM_PROMPT
from ..text.language import language_instruction
from ..text.markdown_chunks import has_markdown, stream_chunks
from ..vendors.gemini import GeminiClient, build_contents, candidate_text, extract_sources

logger = structlog.get_logger(__name__)

PROVISIONING_MARKER = "Service agents are being provisioned"

NDJSON_MEDIA_TYPE = "application/x-ndjson; charset=utf-8"

STREAM_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


def ndjson(event: Dict[str, Any]) -> str:
    return json.dumps(event, ensure_ascii=False) + "\n"


def setup_error_message(error: Exception, prefix: str = "Server error: ") -> str:
    text = str(error)
    if PROVISIONING_MARKER in text:
        return localize("service_agents_provisioning")
    return prefix + text


async def relay_events(
    gemini: GeminiClient,
    request: GeminiRequest,
    rechunk: bool = False,
    word_delay_ms: int = None,
    setup_error_prefix: str = "Server error: "
) -> AsyncIterator[Dict[str, Any]]:
    """Events for one Gemini request.

    Text arrives as ``text`` events, ``search_start`` is sent once when the
    first grounding sources show up, and the stream finishes with either
    ``completed`` or an ``error`` + ``end`` pair. A request that fails before
    streaming yields a single ``{requestId, error, message}`` event.
    With ``rechunk`` every fragment is re-segmented for word-by-word display
    and ``completed`` carries the full text.
    """
    request_id = request.requestId
    delay = (settings.stream_word_delay_ms if word_delay_ms is None else word_delay_ms) / 1000
    log = logger.bind(request_id=request_id or "NO_ID")

    try:
        contents = build_contents(request.messages, request.documents)
        system_instruction = (request.system or GEMINI_SYSTEM_PROMPT) + language_instruction(request.language)
        candidates = await gemini.stream(contents, system_instruction, request.max_tokens)
    except Exception as e:
        log.error("Gemini request could not start", error=str(e))
        yield {"requestId": request_id, "error": True, "message": setup_error_message(e, setup_error_prefix)}
        return

    full_text = ""
    sources = []
    search_notified = False

    try:
        async for candidate in candidates:
            metadata = candidate.get("grounding_metadata")
            if metadata and not search_notified:
                extracted = extract_sources(metadata)
                if extracted:
                    yield {"requestId": request_id, "type": "search_start", "message": localize("google_searching")}
                    sources = extracted
                    search_notified = True

            text = candidate_text(candidate)
            if not text:
                continue
            full_text += text

            if not rechunk:
                yield {"requestId": request_id, "type": "text", "content": text}
                continue

            plain = not has_markdown(text)
            for piece in stream_chunks(text):
                yield {"requestId": request_id, "type": "text", "content": piece}
                if plain and delay:
                    await asyncio.sleep(delay)
    except Exception as e:
        log.error("Gemini stream failed", error=str(e), received_chars=len(full_text))
        yield {"requestId": request_id, "type": "error", "message": "Stream processing failed: " + str(e)}
        yield {"requestId": request_id, "type": "end", "error": True, "message": "Stream ended with errors"}
        return

    completed = {
        "requestId": request_id,
        "type": "completed",
        "sources": sources,
        "webSearchUsed": len(sources) > 0,
    }
    if rechunk:
        completed["fullText"] = full_text

    log.info("Gemini streaming completed", chars=len(full_text), sources=len(sources))
    yield completed


async def relay_ndjson(gemini: GeminiClient, request: GeminiRequest, **kwargs: Any) -> AsyncIterator[str]:
    async for event in relay_events(gemini, request, **kwargs):
        yield ndjson(event)
