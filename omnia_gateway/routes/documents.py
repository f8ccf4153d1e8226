"""Document generation routes"""

from fastapi import APIRouter
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool
import structlog

from ..errors import GatewayError
from ..messages import localize
from ..models import PdfRequest
from ..services.pdf_document import html_document, markdown_to_html, pdf_filename, render_pdf

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/generate-pdf")
async def generate_pdf(body: PdfRequest):
    """Markdown content as an A4 PDF download.

    When the PDF cannot be laid out, the styled HTML is returned instead so
    the browser can print it.
    """
    if not body.title or not body.content:
        raise GatewayError(400, "Invalid request", localize("pdf_fields_required"))

    logger.info("Generating PDF", title=body.title, document_type=body.documentType)
    document = html_document(body.title, markdown_to_html(body.content), body.documentType)

    try:
        pdf = await run_in_threadpool(render_pdf, document)
    except Exception as e:
        logger.warning("PDF rendering failed, returning HTML", title=body.title, error=str(e))
        return {
            "success": True,
            "title": body.title,
            "html": document,
            "message": localize("pdf_html_fallback", error=str(e)),
            "type": "html",
            "fallback": True,
            "error": str(e),
        }

    logger.info("PDF generated", title=body.title, size=len(pdf))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(body.title)}"'},
    )
