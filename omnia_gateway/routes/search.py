"""Search-backed answers: Grok live search, Perplexity, Sonar and Google Custom Search"""

from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional
from urllib.parse import urlparse

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
import structlog

from ..config import settings
from ..dependencies import get_google_search, get_grok, get_perplexity
from ..errors import GatewayError, VendorError
from ..messages import localize
from ..models import GrokRequest, SearchRequest
from ..prompts import perplexity_prompt, sonar_prompt
from ..services.gemini_relay import NDJSON_MEDIA_TYPE, STREAM_HEADERS, ndjson
from ..services.grok_relay import answer_text, grok_events
from ..vendors.google_search import GoogleSearchClient
from ..vendors.openai_chat import OpenAIClient

logger = structlog.get_logger(__name__)
router = APIRouter()

# Perplexity recency filters; "recent" is the frontend's default
RECENCY_FILTERS = {
    "recent": "week",
    "hour": "hour",
    "day": "day",
    "week": "week",
    "month": "month",
    "year": "year",
}


def require_query(body: SearchRequest) -> str:
    query = (body.query or "").strip()
    if not query:
        raise GatewayError(400, "Invalid request", localize("search_query_required", body.language))
    return query


def search_failure(e: VendorError, error: str, service: str, language: str) -> GatewayError:
    return GatewayError(
        e.status_code,
        error,
        localize("search_failed", language, service=service),
        details=e.details,
        retryable=e.retryable,
    )


def citation_links(citations: List[Any]) -> List[str]:
    links = []
    for citation in citations:
        if isinstance(citation, str):
            links.append(citation)
        elif isinstance(citation, dict) and (citation.get("url") or citation.get("title")):
            links.append(citation.get("url") or citation.get("title"))
    return links


def numbered_sources(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Search results (or bare citation URLs) as {id, title, url, domain}"""
    entries = data.get("search_results") or [{"url": url} for url in citation_links(data.get("citations") or [])]
    sources = []
    for index, entry in enumerate(entries, start=1):
        url = entry.get("url") or "#"
        sources.append({
            "id": index,
            "title": entry.get("title") or f"Zdroj {index}",
            "url": url,
            "domain": urlparse(url).hostname or "unknown",
        })
    return sources


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _grok_stream(grok: Optional[OpenAIClient], body: GrokRequest) -> AsyncIterator[str]:
    if grok is None:
        yield ndjson({"error": True, "message": localize("config_missing", body.language, service="Grok")})
        return
    async for event in grok_events(grok, body):
        yield ndjson(event)


@router.post("/grok")
async def grok(body: GrokRequest, grok_client: Optional[OpenAIClient] = Depends(get_grok)):
    """Grok answer with live web search, streamed word by word as NDJSON"""
    if not body.messages:
        raise GatewayError(400, "Invalid request", localize("invalid_messages", body.language))

    logger.info("Grok request", messages=len(body.messages), language=body.language)
    return StreamingResponse(
        _grok_stream(grok_client, body),
        media_type=NDJSON_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )


@router.post("/perplexity-search")
async def perplexity_search(body: SearchRequest, perplexity: OpenAIClient = Depends(get_perplexity)):
    """Voice-friendly answer from Perplexity with numbered sources"""
    query = require_query(body)
    logger.info("Perplexity search", query=query[:50], language=body.language)

    try:
        data = await perplexity.chat(
            [
                {"role": "system", "content": perplexity_prompt(body.language)},
                {"role": "user", "content": query},
            ],
            max_tokens=1500,
            model=settings.perplexity_model,
            temperature=0.2,
            top_p=0.9,
        )
    except VendorError as e:
        raise search_failure(e, "Perplexity search failed", "Perplexity", body.language)

    if not data.get("choices"):
        logger.error("Invalid Perplexity response structure", keys=list(data))
        raise GatewayError(500, "Invalid response structure from Perplexity", localize("unexpected_structure", body.language))

    result = answer_text(data)
    sources = numbered_sources(data)
    logger.info("Perplexity search succeeded", result_length=len(result), sources=len(sources))

    return {
        "success": True,
        "result": result,
        "sources": sources,
        "citations": data.get("citations") or [],
        "query": query,
        "language": body.language,
        "model": data.get("model"),
        "usage": data.get("usage") or {},
        "timestamp": now_iso(),
    }


@router.post("/sonar-search")
async def sonar_search(body: SearchRequest, perplexity: OpenAIClient = Depends(get_perplexity)):
    """Perplexity Sonar answer with its citation links"""
    query = require_query(body)
    logger.info("Sonar search", query=query[:50], language=body.language, freshness=body.freshness)

    options: Dict[str, Any] = {
        "temperature": 0.2,
        "top_p": 0.9,
        "return_images": False,
        "return_related_questions": False,
        "frequency_penalty": 1,
    }
    recency = RECENCY_FILTERS.get(body.freshness)
    if recency:
        options["search_recency_filter"] = recency

    try:
        data = await perplexity.chat(
            [
                {"role": "system", "content": sonar_prompt(body.language)},
                {"role": "user", "content": query},
            ],
            max_tokens=2000,
            model=settings.sonar_model,
            **options,
        )
    except VendorError as e:
        raise search_failure(e, f"Sonar API Error: {e.status_code}", "Sonar", body.language)

    citations = data.get("citations") or []
    return {
        "success": True,
        "result": answer_text(data),
        "citations": citations,
        "sources": citation_links(citations),
        "query": query,
        "language": body.language,
        "timestamp": now_iso(),
    }


@router.post("/google-search")
async def google_search(body: SearchRequest, google: GoogleSearchClient = Depends(get_google_search)):
    """Top Google Custom Search results as {title, snippet, link}"""
    query = require_query(body)

    try:
        results = await google.search(query, language=body.language)
    except VendorError as e:
        raise search_failure(e, "Google Search API error", "Google", body.language)

    if not results:
        return {"success": False, "message": localize("no_search_results", body.language), "results": []}
    return {"success": True, "results": results}
