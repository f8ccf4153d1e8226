"""Markdown documents rendered to A4 PDF"""

import io
import re
from datetime import date
from html import escape
from typing import Optional

import markdown
from xhtml2pdf import pisa

from ..prompts import DATE_FORMATS

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

BASE_STYLES = """
    @page { size: a4 portrait; margin: 2cm; }
    body { font-family: Times-Roman; font-size: 12pt; line-height: 1.6; color: #000; }
    .header { margin-bottom: 30px; padding-bottom: 15px; border-bottom: 1px solid #000; text-align: center; }
    .header h1 { font-size: 18pt; font-weight: bold; margin-bottom: 10px; }
    .meta { font-size: 10pt; }
    .main { margin-bottom: 30px; }
    h1 { font-size: 16pt; font-weight: bold; margin: 20px 0 10px 0; }
    h2 { font-size: 14pt; font-weight: bold; margin: 18px 0 8px 0; }
    h3 { font-size: 13pt; font-weight: bold; margin: 16px 0 6px 0; }
    h4, h5, h6 { font-size: 12pt; font-weight: bold; margin: 12px 0 4px 0; }
    p { margin-bottom: 12px; text-align: justify; }
    li { margin-bottom: 6px; }
    table { width: 100%; margin: 15px 0; }
    th, td { border: 1px solid #000; padding: 8px; text-align: left; font-size: 11pt; }
    th { background-color: #f5f5f5; font-weight: bold; }
    code, pre { font-family: Courier; font-size: 10pt; background-color: #f5f5f5; }
    pre { padding: 10px; border: 1px solid #ddd; margin: 12px 0; }
    blockquote { margin: 12px 0; padding-left: 15px; border-left: 3px solid #000; font-style: italic; }
    .footer { margin-top: 30px; padding-top: 15px; border-top: 1px solid #000; font-size: 10pt; text-align: center; }
"""

TYPE_STYLES = {
    "report": """
    .header h1 { font-size: 24pt; }
    h2 { border-bottom: 1px solid #e0e0e0; padding-bottom: 8px; }
""",
    "invoice": """
    th, td { padding: 10px; border: none; border-bottom: 1px solid #e0e0e0; }
""",
    "cv": """
    .header h1 { font-size: 21pt; margin-bottom: 5px; }
    h2 { font-size: 14pt; color: #3498db; border-bottom: 2px solid #3498db; padding-bottom: 5px; }
""",
}

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{title}</title>
<style>{styles}</style>
</head>
<body>
<div class="header">
<h1>{title}</h1>
<div class="meta">Generated on {generated}</div>
</div>
<div class="main">
{body}
</div>
<div class="footer"><p>Generated by Omnia One AI</p></div>
</body>
</html>"""


class PdfRenderError(Exception):
    """xhtml2pdf reported errors while laying out the document"""


def markdown_to_html(content: str) -> str:
    return markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS)


def styles_for(document_type: str) -> str:
    return BASE_STYLES + TYPE_STYLES.get(document_type, "")


def html_document(title: str, body_html: str, document_type: str = "document", today: Optional[date] = None) -> str:
    today = today or date.today()
    return DOCUMENT_TEMPLATE.format(
        title=escape(title),
        styles=styles_for(document_type),
        generated=DATE_FORMATS["en"].format(d=today.day, m=today.month, y=today.year),
        body=body_html,
    )


def render_pdf(document: str) -> bytes:
    output = io.BytesIO()
    status = pisa.CreatePDF(document, dest=output, encoding="utf-8")
    if status.err:
        raise PdfRenderError(f"{status.err} error(s) while rendering the document")
    return output.getvalue()


def pdf_filename(title: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", title) + ".pdf"
