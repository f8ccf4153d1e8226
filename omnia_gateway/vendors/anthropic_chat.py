"""Claude via the Anthropic SDK"""

from typing import Any, Dict, List, Optional

import anthropic
import structlog

from ..config import settings
from ..errors import VendorError

logger = structlog.get_logger(__name__)

VENDOR = "Claude"

WEB_SEARCH_TOOL_NAME = "web_search"


def web_search_tool(max_uses: Optional[int] = None) -> Dict[str, Any]:
    return {
        "type": "web_search_20250305",
        "name": WEB_SEARCH_TOOL_NAME,
        "max_uses": max_uses or settings.web_search_max_uses,
    }


def text_of(message: Any) -> str:
    """All text blocks of a Claude message, newline-joined and stripped"""
    parts = [
        block.text
        for block in (getattr(message, "content", None) or [])
        if getattr(block, "type", None) == "text" and getattr(block, "text", None)
    ]
    return "\n".join(parts).strip()


def used_web_search(message: Any) -> bool:
    """Whether Claude invoked the web_search tool while answering"""
    return any(
        getattr(block, "type", None) in ("tool_use", "server_tool_use")
        and getattr(block, "name", None) == WEB_SEARCH_TOOL_NAME
        for block in (getattr(message, "content", None) or [])
    )


def usage_of(message: Any) -> Dict[str, Any]:
    usage = getattr(message, "usage", None)
    return usage.model_dump() if usage is not None else {}


class ClaudeClient:
    """Anthropic messages API wrapper raising VendorError"""

    def __init__(self, api_key: str, client: Optional[anthropic.AsyncAnthropic] = None):
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key)
        self.model = settings.claude_model

    async def create_message(
        self,
        messages: List[Dict[str, Any]],
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        tools: Optional[List[Dict[str, Any]]] = None
    ):
        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens or settings.claude_max_tokens,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = tools

        try:
            response = await self.client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            logger.error("Claude API error", status_code=e.status_code, error=str(e))
            raise VendorError(VENDOR, e.status_code, e.message) from e
        except anthropic.APITimeoutError as e:
            logger.error("Claude API timed out", error=str(e))
            raise VendorError(VENDOR, 504, str(e)) from e
        except anthropic.APIConnectionError as e:
            logger.error("Claude API unreachable", error=str(e))
            raise VendorError(VENDOR, 502, str(e)) from e

        logger.info("Claude response received",
                    model=response.model,
                    stop_reason=response.stop_reason,
                    blocks=len(response.content))
        return response
