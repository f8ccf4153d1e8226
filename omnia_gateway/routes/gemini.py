"""Gemini streaming routes (NDJSON over HTTP and a WebSocket variant)"""

import json
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import StreamingResponse
from pydantic import ValidationError
import structlog

from ..dependencies import get_gemini
from ..messages import localize
from ..models import GeminiRequest
from ..services.gemini_relay import NDJSON_MEDIA_TYPE, STREAM_HEADERS, ndjson, relay_events, relay_ndjson
from ..vendors.gemini import GeminiClient

logger = structlog.get_logger(__name__)
router = APIRouter()


def credentials_missing(request_id: Optional[str]) -> Dict[str, Any]:
    return {"requestId": request_id, "error": True, "message": localize("google_credentials_missing")}


async def _ndjson_stream(gemini: Optional[GeminiClient], body: GeminiRequest, **kwargs: Any) -> AsyncIterator[str]:
    if gemini is None:
        yield ndjson(credentials_missing(body.requestId))
        return
    async for line in relay_ndjson(gemini, body, **kwargs):
        yield line


@router.post("/gemini")
async def gemini_stream(body: GeminiRequest, gemini: Optional[GeminiClient] = Depends(get_gemini)):
    """Raw Gemini chunks as they arrive"""
    logger.info("Gemini request", request_id=body.requestId or "NO_ID", messages=len(body.messages))
    return StreamingResponse(
        _ndjson_stream(gemini, body),
        media_type=NDJSON_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )


@router.post("/gemini-ws")
async def gemini_chunked_stream(body: GeminiRequest, gemini: Optional[GeminiClient] = Depends(get_gemini)):
    """Gemini text re-segmented into markdown-safe, word-sized chunks"""
    logger.info("Gemini chunked request", request_id=body.requestId or "NO_ID", messages=len(body.messages))
    return StreamingResponse(
        _ndjson_stream(gemini, body, rechunk=True),
        media_type=NDJSON_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )


def decode_frame(message: Dict[str, Any]) -> GeminiRequest:
    """Text or UTF-8 binary frame holding one JSON request"""
    raw = message.get("text")
    if raw is None:
        raw = (message.get("bytes") or b"").decode("utf-8")
    return GeminiRequest.model_validate(json.loads(raw))


@router.websocket("/gemini-ws")
async def gemini_websocket(websocket: WebSocket, gemini: Optional[GeminiClient] = Depends(get_gemini)):
    """Each inbound JSON message is one Gemini request; events go back as text frames"""
    await websocket.accept()
    logger.info("Gemini WebSocket connected")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            try:
                body = decode_frame(message)
            except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
                logger.warning("Invalid WebSocket message", error=str(e))
                await websocket.send_text(json.dumps({"error": True, "message": "Invalid message format"}))
                continue

            if gemini is None:
                await websocket.send_text(json.dumps(credentials_missing(body.requestId), ensure_ascii=False))
                continue

            async for event in relay_events(gemini, body, rechunk=True, setup_error_prefix="WebSocket error: "):
                await websocket.send_text(json.dumps(event, ensure_ascii=False))
    except WebSocketDisconnect:
        logger.info("Gemini WebSocket disconnected")
