"""Google Custom Search JSON API"""

from typing import Any, Dict, List, Optional

import httpx
import structlog

from ..config import settings
from ..utils.http_client import vendor_request

logger = structlog.get_logger(__name__)

VENDOR = "Google Search"


def search_result(item: Dict[str, Any]) -> Dict[str, str]:
    return {
        "title": item.get("title") or "Bez názvu",
        "snippet": item.get("snippet") or "Bez popisu",
        "link": item.get("link") or "#",
    }


class GoogleSearchClient:
    """Web search through a Programmable Search Engine (cx)"""

    def __init__(self, http_client: httpx.AsyncClient, api_key: str, engine_id: str):
        self.http = http_client
        self.api_key = api_key
        self.engine_id = engine_id

    async def search(self, query: str, language: str = "cs", num: Optional[int] = None) -> List[Dict[str, str]]:
        response = await vendor_request(
            self.http,
            VENDOR,
            "GET",
            settings.google_search_url,
            params={
                "key": self.api_key,
                "cx": self.engine_id,
                "q": query,
                "num": num or settings.google_search_results,
                "hl": language,
            },
        )
        items = response.json().get("items") or []
        logger.info("Google search finished", query=query[:50], results=len(items))
        return [search_result(item) for item in items]
