"""Health check endpoints"""

from typing import Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel
import structlog

from .. import __version__

logger = structlog.get_logger(__name__)
router = APIRouter()

VENDOR_ATTRIBUTES = {
    "claude": "claude",
    "openai": "openai",
    "gemini": "gemini",
    "elevenlabs": "elevenlabs",
    "google_stt": "google_stt",
    "google_tts": "google_tts",
}


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    services: Dict[str, str]


@router.get("", response_model=HealthResponse)
async def health_check(request: Request):
    """Service status and which vendors have credentials"""
    services = {
        name: "configured" if getattr(request.app.state, attribute, None) is not None else "missing"
        for name, attribute in VENDOR_ATTRIBUTES.items()
    }
    return HealthResponse(status="healthy", version=__version__, services=services)


@router.get("/live")
async def liveness_check():
    """Liveness check"""
    return {"status": "alive"}
