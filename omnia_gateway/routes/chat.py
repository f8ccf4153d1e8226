"""Chat completion routes: Claude, Claude with web search, OpenAI"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
import structlog

from ..config import settings
from ..dependencies import get_claude, get_openai
from ..errors import GatewayError, VendorError
from ..messages import localize
from ..models import ChatRequest, WebSearchRequest
from ..prompts import CHAT_SYSTEM_PROMPT, translation_prompt, web_search_prompt
from ..text.language import detect_response_language, language_name
from ..utils.logging import preview
from ..vendors.anthropic_chat import ClaudeClient, text_of, usage_of, used_web_search, web_search_tool
from ..vendors.openai_chat import OpenAIClient

logger = structlog.get_logger(__name__)
router = APIRouter()


def require_message_list(messages: Any) -> List[Any]:
    if not isinstance(messages, list):
        raise GatewayError(400, "Invalid request", localize("invalid_messages"))
    return messages


def to_claude_messages(messages: List[Any]) -> List[Dict[str, Any]]:
    """Accept both {role, content} and the frontend's {sender, text} shape"""
    converted = []
    for message in messages:
        if not isinstance(message, dict):
            continue
        role = message.get("role") or ("user" if message.get("sender") == "user" else "assistant")
        content = message.get("content")
        if content is None:
            content = message.get("text") or ""
        converted.append({"role": role, "content": content})
    return converted


@router.post("/claude")
async def claude_chat(body: ChatRequest, claude: ClaudeClient = Depends(get_claude)):
    """Claude chat over the most recent messages"""
    messages = require_message_list(body.messages)
    recent = to_claude_messages(messages[-settings.claude_history_window:])

    try:
        response = await claude.create_message(
            recent,
            system=CHAT_SYSTEM_PROMPT,
            max_tokens=settings.claude_max_tokens,
        )
    except VendorError as e:
        raise GatewayError(
            e.status_code,
            "Claude API error",
            localize("ai_failed"),
            details=e.details,
            extra={"status": e.status_code},
        )

    if not text_of(response):
        logger.error("Invalid Claude response structure", blocks=len(response.content or []))
        raise GatewayError(500, "Invalid response from Claude", localize("ai_empty"))

    return {
        "success": True,
        "content": [block.model_dump() for block in response.content],
        "model": response.model,
        "usage": usage_of(response),
    }


@router.post("/claude-web-search")
async def claude_web_search(body: WebSearchRequest, claude: ClaudeClient = Depends(get_claude)):
    """Claude answer backed by the web_search tool, forced into the requested language"""
    if not body.query:
        raise GatewayError(400, "Query is required", localize("query_required"))

    language = body.language
    target = language_name(language)
    logger.info("Claude web search request", query=preview(body.query), language=language)

    try:
        response = await claude.create_message(
            [{
                "role": "user",
                "content": f"{body.query}\n\nIMPORTANT: Respond ONLY in {target} language. "
                           "Translate any search results if needed.",
            }],
            system=web_search_prompt(language),
            max_tokens=settings.web_search_max_tokens,
            tools=[web_search_tool()],
        )
    except VendorError as e:
        raise GatewayError(
            e.status_code,
            f"Claude API error: {e.status_code}",
            localize("search_no_results", language),
            details=e.details,
        )

    result = text_of(response) or localize("search_no_results", language)

    detected = detect_response_language(result)
    if detected not in (language, "unknown"):
        logger.info("Web search answer language mismatch, translating", detected=detected, expected=language)
        try:
            translation = await claude.create_message(
                [{"role": "user", "content": f"Translate this to {target}:\n\n{result}"}],
                system=translation_prompt(target),
                max_tokens=settings.web_search_max_tokens,
            )
            result = text_of(translation) or result
        except VendorError as e:
            # The untranslated answer is still returned
            logger.warning("Translation of web search answer failed", status_code=e.status_code)

    web_search_used = used_web_search(response)
    sources = []
    if web_search_used:
        sources = [{"id": 1, "title": "Web Search Results", "url": "#", "domain": "claude-search"}]

    return {
        "success": True,
        "result": result,
        "sources": sources,
        "query": body.query,
        "language": language,
        "webSearchUsed": web_search_used,
        "model": response.model,
        "usage": usage_of(response),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/openai")
async def openai_chat(body: ChatRequest, openai_client: OpenAIClient = Depends(get_openai)):
    messages = require_message_list(body.messages)

    try:
        data = await openai_client.chat(messages, max_tokens=settings.openai_max_tokens)
    except VendorError as e:
        raise GatewayError(
            e.status_code,
            "OpenAI API error",
            localize("ai_failed"),
            details=e.details,
            extra={"status": e.status_code},
        )

    choices = data.get("choices") or []
    if not choices or not choices[0].get("message"):
        logger.error("Invalid OpenAI response", keys=list(data.keys()))
        raise GatewayError(500, "Invalid response from OpenAI", localize("ai_empty"))

    return data
