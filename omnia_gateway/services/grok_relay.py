"""Grok answers with live search, relayed as word-by-word NDJSON events"""

import asyncio
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional

import structlog

from ..config import settings
from ..errors import VendorError
from ..messages import localize
from ..models import ChatMessage, GrokRequest
from ..prompts import GROK_SYSTEM_PROMPT, GROK_TIME_AWARE_QUERY
from ..vendors.gemini import PRAGUE
from ..vendors.openai_chat import OpenAIClient

logger = structlog.get_logger(__name__)

REAL_TIME_KEYWORDS = [
    "stock", "price", "cena", "kurz", "akcie", "shares",
    "weather", "počasí", "teplota", "temperatura",
    "news", "zprávy", "breaking", "latest",
    "bitcoin", "crypto", "ethereum", "btc", "eth",
    "current", "aktuální", "teď", "now", "dnes", "today",
    "exchange", "rate", "měna", "dollar", "euro",
]

# xAI live search options
SEARCH_PARAMETERS = {
    "mode": "auto",
    "return_citations": True,
    "max_search_results": 20,
    "safe_search": False,
    "language_override": "en",
}


def needs_real_time_data(query: str) -> bool:
    lowered = query.lower()
    return any(keyword in lowered for keyword in REAL_TIME_KEYWORDS)


def enhance_time_aware(query: str, now: Optional[datetime] = None) -> str:
    """Ask for the Prague time up front when the query is about live data"""
    if not needs_real_time_data(query):
        return query
    now = (now or datetime.now(PRAGUE)).astimezone(PRAGUE)
    return GROK_TIME_AWARE_QUERY.format(query=query, time=now.strftime("%Y-%m-%d %H:%M"))


def grok_messages(messages: List[ChatMessage], system: Optional[str] = None) -> List[Dict[str, str]]:
    converted = [{"role": "system", "content": system or GROK_SYSTEM_PROMPT}]
    converted.extend(
        {"role": "user" if message.is_user else "assistant", "content": message.body}
        for message in messages[-settings.grok_history_window:]
    )
    if converted[-1]["role"] == "user":
        converted[-1]["content"] = enhance_time_aware(converted[-1]["content"])
    return converted


def citations_of(data: Dict[str, Any]) -> List[Any]:
    if data.get("citations"):
        return data["citations"]
    choices = data.get("choices") or [{}]
    return (choices[0].get("message") or {}).get("citations") or []


def answer_text(data: Dict[str, Any]) -> str:
    choices = data.get("choices") or [{}]
    return ((choices[0].get("message") or {}).get("content") or "").strip()


async def _pause(milliseconds: int) -> None:
    if milliseconds > 0:
        await asyncio.sleep(milliseconds / 1000)


async def grok_events(grok: OpenAIClient, request: GrokRequest) -> AsyncIterator[Dict[str, Any]]:
    """``search_start`` when live search cited sources, word ``text`` events, then ``completed``.

    Failures produce a single ``{error, message}`` event.
    """
    try:
        data = await grok.chat(
            grok_messages(request.messages, request.system),
            max_tokens=settings.grok_max_tokens,
            temperature=0.5,
            search_parameters=SEARCH_PARAMETERS,
        )
    except VendorError as e:
        logger.error("Grok request failed", status_code=e.status_code, error=e.details)
        yield {"error": True, "message": f"HTTP {e.status_code}: {e.details}"}
        return
    except Exception as e:
        logger.error("Grok relay failed", error=str(e))
        yield {"error": True, "message": "Server error: " + str(e)}
        return

    text = answer_text(data) or localize("no_answer", request.language)
    citations = citations_of(data)
    logger.info("Grok response received", text_length=len(text), citations=len(citations))

    if citations:
        yield {"type": "search_start", "message": localize("searching_latest", request.language)}
        await _pause(settings.grok_search_pause_ms)

    for word in text.split(" "):
        yield {"type": "text", "content": word + " "}
        await _pause(settings.grok_word_delay_ms)

    yield {
        "type": "completed",
        "fullText": text,
        "citations": citations,
        "webSearchUsed": bool(citations),
    }
