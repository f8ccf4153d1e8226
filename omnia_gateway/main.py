"""
Omnia Gateway
FastAPI service proxying the Omnia assistant to Claude, OpenAI, Gemini, Grok,
Perplexity, Google Speech, Google Search and ElevenLabs
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from . import __version__
from .config import settings
from .errors import GatewayError
from .messages import localize
from .middleware.metrics import MetricsMiddleware
from .models import ErrorEnvelope
from .routes import chat, dev_proxy, documents, gemini, health, search, speech, tts, voice_pipeline
from .utils.http_client import http_pool
from .utils.logging import setup_logging
from .vendors import (
    ClaudeClient,
    ElevenLabsClient,
    GeminiClient,
    GoogleSearchClient,
    GoogleSpeechClient,
    OpenAIClient,
)

# Setup structured logging
setup_logging()
logger = structlog.get_logger(__name__)


async def create_vendor_clients(app: FastAPI) -> None:
    """Build a client for every vendor that has credentials; others stay None"""
    http_client = await http_pool.get_client()

    app.state.claude = ClaudeClient(settings.anthropic_api_key) if settings.anthropic_api_key else None
    app.state.openai = OpenAIClient(settings.openai_api_key) if settings.openai_api_key else None
    app.state.gemini = GeminiClient(settings.gemini_api_key) if settings.gemini_api_key else None
    app.state.grok = (
        OpenAIClient(settings.grok_api_key, base_url=settings.grok_base_url, vendor="Grok", model=settings.grok_model)
        if settings.grok_api_key else None
    )
    app.state.perplexity = (
        OpenAIClient(
            settings.perplexity_api_key,
            base_url=settings.perplexity_base_url,
            vendor="Perplexity",
            model=settings.perplexity_model,
        )
        if settings.perplexity_api_key else None
    )
    app.state.elevenlabs = (
        ElevenLabsClient(http_client, settings.elevenlabs_api_key)
        if settings.elevenlabs_api_key else None
    )
    app.state.google_stt = (
        GoogleSpeechClient(http_client, settings.google_api_key, settings.google_tts_api_key)
        if settings.google_api_key else None
    )
    app.state.google_tts = (
        GoogleSpeechClient(http_client, settings.google_api_key, settings.google_tts_api_key)
        if settings.google_tts_api_key else None
    )
    app.state.google_search = (
        GoogleSearchClient(http_client, settings.google_search_api_key, settings.google_cse_id)
        if settings.google_search_api_key and settings.google_cse_id else None
    )

    logger.info("Vendor clients ready",
                claude=app.state.claude is not None,
                openai=app.state.openai is not None,
                gemini=app.state.gemini is not None,
                grok=app.state.grok is not None,
                perplexity=app.state.perplexity is not None,
                elevenlabs=app.state.elevenlabs is not None,
                google_stt=app.state.google_stt is not None,
                google_tts=app.state.google_tts is not None,
                google_search=app.state.google_search is not None)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("🚀 Starting Omnia Gateway")

    await http_pool.initialize()
    await create_vendor_clients(app)

    logger.info("✅ Gateway startup complete")

    yield

    logger.info("🛑 Shutting down Gateway")
    await http_pool.close()
    logger.info("✅ Gateway shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Omnia Gateway",
    description="AI vendor proxy for the Omnia assistant",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[
        "X-User-Text", "X-AI-Response", "X-Language", "X-Pipeline",
        "X-Voice-Transform", "X-Original-Size", "X-Output-Size",
    ],
)

if settings.metrics_enabled:
    app.add_middleware(MetricsMiddleware)

# Include routers
ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Invalid request"},
    500: {"model": ErrorEnvelope, "description": "Vendor or configuration failure"},
}

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(chat.router, prefix="/api", tags=["chat"], responses=ERROR_RESPONSES)
app.include_router(gemini.router, prefix="/api", tags=["gemini"], responses=ERROR_RESPONSES)
app.include_router(speech.router, prefix="/api", tags=["speech"], responses=ERROR_RESPONSES)
app.include_router(tts.router, prefix="/api", tags=["tts"], responses=ERROR_RESPONSES)
app.include_router(voice_pipeline.router, prefix="/api", tags=["voice"], responses=ERROR_RESPONSES)
app.include_router(search.router, prefix="/api", tags=["search"], responses=ERROR_RESPONSES)
app.include_router(documents.router, prefix="/api", tags=["documents"], responses=ERROR_RESPONSES)

if settings.enable_dev_proxy:
    app.include_router(dev_proxy.router, tags=["dev-proxy"])


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    """Errors raised by routes carry their own envelope"""
    logger.warning("Request failed",
                   path=request.url.path,
                   status_code=exc.status_code,
                   error=exc.error)
    return exc.to_response()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "path": request.url.path
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return GatewayError(
        400,
        "Invalid request",
        localize("invalid_request"),
        details=jsonable_encoder(exc.errors()),
    ).to_response()


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "message": localize("internal_error"),
            "path": request.url.path
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Omnia Gateway",
        "version": __version__,
        "status": "running",
        "docs": "/docs" if settings.debug else "disabled"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "omnia_gateway.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
