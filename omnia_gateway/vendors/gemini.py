"""Gemini streaming with Google Search grounding"""

from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional
from zoneinfo import ZoneInfo

from google import genai
from google.genai import errors, types
import structlog

from ..config import settings
from ..errors import VendorError
from ..models import ChatMessage, Document

logger = structlog.get_logger(__name__)

VENDOR = "Gemini"

PRAGUE = ZoneInfo("Europe/Prague")

CURRENT_DATA_KEYWORDS = [
    "aktuální", "current", "nejnovější", "latest", "teď", "now", "dnes", "today",
    "cena", "price", "kurz", "stock", "akcie", "shares", "bitcoin", "crypto",
    "počasí", "weather", "zprávy", "news", "breaking", "exchange", "rate",
    "dollar", "euro", "koruna", "ethereum", "btc", "eth", "teplota",
]

MIME_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "doc": "application/msword",
    "txt": "text/plain",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
}

MAX_SOURCES = 5
SNIPPET_LENGTH = 200


def needs_current_data(query: str) -> bool:
    lowered = query.lower()
    return any(keyword in lowered for keyword in CURRENT_DATA_KEYWORDS)


def enhance_for_search(query: str, now: Optional[datetime] = None) -> str:
    """Append the Prague wall-clock time to queries about current data"""
    if not needs_current_data(query):
        return query
    now = (now or datetime.now(PRAGUE)).astimezone(PRAGUE)
    stamp = f"{now.day}. {now.month}. {now.year} {now.hour:02d}:{now.minute:02d}"
    return f"{query}\n\nAktuální čas: {stamp}"


def mime_type_for(name: Optional[str]) -> str:
    if not name or "." not in name:
        return "application/pdf"
    return MIME_TYPES.get(name.lower().rsplit(".", 1)[-1], "application/pdf")


def build_contents(messages: List[ChatMessage], documents: Optional[List[Document]] = None) -> List[Dict[str, Any]]:
    """Chat history as Gemini contents.

    The last user turn gets the current time appended when relevant, and
    attached documents are placed in front of its text.
    """
    contents = [
        {"role": "user" if message.is_user else "model", "parts": [{"text": message.body}]}
        for message in messages
        if message.body
    ]

    if not contents or contents[-1]["role"] != "user":
        return contents

    last = contents[-1]
    last["parts"][0]["text"] = enhance_for_search(last["parts"][0]["text"])

    for document in documents or []:
        if document.geminiFileUri:
            last["parts"].insert(0, {
                "file_data": {
                    "mime_type": mime_type_for(document.name),
                    "file_uri": document.geminiFileUri,
                }
            })
        elif document.extractedText:
            last["parts"].insert(0, {
                "text": f"📄 Content of {document.name}:\n\n{document.extractedText}"
            })

    return contents


def extract_sources(grounding_metadata: Optional[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Web sources cited by grounding supports, unique by URL, at most five"""
    if not grounding_metadata or not grounding_metadata.get("grounding_supports"):
        return []

    chunks = grounding_metadata.get("grounding_chunks") or []
    sources = []
    seen = set()

    for support in grounding_metadata["grounding_supports"]:
        text = (support.get("segment") or {}).get("text")
        if not text:
            continue
        for index in support.get("grounding_chunk_indices") or []:
            if index >= len(chunks):
                continue
            web = chunks[index].get("web")
            if not web:
                continue
            url = web.get("uri") or "#"
            if url in seen:
                continue
            seen.add(url)
            sources.append({
                "title": web.get("title") or "Web Source",
                "url": url,
                "snippet": text[:SNIPPET_LENGTH] + "...",
            })

    return sources[:MAX_SOURCES]


def candidate_text(candidate: Dict[str, Any]) -> str:
    parts = (candidate.get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return parts[0].get("text") or ""


def search_tools() -> Optional[List[types.Tool]]:
    """Google Search grounding tool, unless disabled in settings"""
    if not settings.gemini_search_grounding:
        return None
    return [types.Tool(google_search=types.GoogleSearch())]


def first_candidate(chunk: types.GenerateContentResponse) -> Optional[Dict[str, Any]]:
    if not chunk.candidates:
        return None
    return chunk.candidates[0].model_dump(exclude_none=True)


class GeminiClient:
    """google-genai streaming wrapper"""

    def __init__(
        self,
        api_key: str,
        model_name: Optional[str] = None,
        client: Optional[genai.Client] = None
    ):
        self.client = client or genai.Client(api_key=api_key)
        self.model_name = model_name or settings.gemini_model

    def generation_config(self, system_instruction: str, max_tokens: int) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            max_output_tokens=max_tokens,
            temperature=0.5,
            top_p=0.7,
            top_k=20,
            tools=search_tools(),
        )

    async def stream(
        self,
        contents: List[Dict[str, Any]],
        system_instruction: str,
        max_tokens: Optional[int] = None
    ) -> AsyncIterator[Dict[str, Any]]:
        """Start generation and return an iterator over candidate dicts.

        The first chunk is awaited here, so failures to start raise from this
        call; failures while streaming surface from the returned iterator.
        """
        config = self.generation_config(system_instruction, max_tokens or settings.gemini_max_tokens)

        try:
            chunks = await self.client.aio.models.generate_content_stream(
                model=self.model_name,
                contents=contents,
                config=config,
            )
            first = await chunks.__anext__()
        except StopAsyncIteration:
            first = None
        except errors.APIError as e:
            logger.error("Gemini request failed", status=e.code, error=e.message)
            raise VendorError(VENDOR, e.code or 502, e.message or str(e)) from e

        return self._candidates(first, chunks)

    @staticmethod
    async def _candidates(first, chunks) -> AsyncIterator[Dict[str, Any]]:
        if first is None:
            return

        candidate = first_candidate(first)
        if candidate:
            yield candidate

        async for chunk in chunks:
            candidate = first_candidate(chunk)
            if candidate:
                yield candidate
