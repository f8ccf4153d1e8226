"""Local development proxy: prompt-in/message-out Claude and raw OpenAI passthrough"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import structlog

from ..dependencies import get_claude, get_openai
from ..errors import VendorError
from ..messages import localize
from ..models import PromptRequest
from ..vendors.anthropic_chat import ClaudeClient
from ..vendors.openai_chat import OpenAIClient

logger = structlog.get_logger(__name__)
router = APIRouter()

PROXY_MAX_TOKENS = 1024


@router.post("/claude")
async def proxy_claude(body: PromptRequest, claude: ClaudeClient = Depends(get_claude)):
    try:
        response = await claude.create_message(
            [{"role": "user", "content": body.prompt}],
            max_tokens=PROXY_MAX_TOKENS,
        )
    except VendorError as e:
        logger.error("Proxy Claude call failed", status_code=e.status_code)
        return JSONResponse(status_code=500, content={"error": "Chyba při komunikaci s API."})

    blocks = response.content or []
    first = blocks[0] if blocks else None
    if getattr(first, "type", None) != "text":
        logger.warning("Unexpected Claude response structure", blocks=len(blocks))
        return JSONResponse(status_code=500, content={"error": localize("unexpected_structure")})

    return {"message": first.text}


@router.post("/openai")
async def proxy_openai(request: Request, openai_client: OpenAIClient = Depends(get_openai)):
    """Forward the body to chat completions unchanged"""
    payload = dict(await request.json())
    messages = payload.pop("messages", [])

    try:
        return await openai_client.chat(messages, **payload)
    except VendorError as e:
        logger.error("Proxy OpenAI call failed", status_code=e.status_code)
        return JSONResponse(
            status_code=e.status_code,
            content={"error": "Chyba při komunikaci s OpenAI API.", "details": e.details},
        )
