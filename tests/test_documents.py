"""Tests for markdown to PDF generation"""

from datetime import date

from omnia_gateway.messages import localize
from omnia_gateway.routes import documents
from omnia_gateway.services.pdf_document import (
    PdfRenderError,
    html_document,
    markdown_to_html,
    pdf_filename,
    styles_for,
)

REPORT = {
    "title": "Quarterly report",
    "content": "# Summary\n\nRevenue **grew**.\n\n| Month | Sales |\n|---|---|\n| Jan | 10 |\n\n- one\n- two",
    "documentType": "report",
}


def test_generate_pdf(client):
    response = client.post("/api/generate-pdf", json=REPORT)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="Quarterly_report.pdf"'
    assert response.content.startswith(b"%PDF")


def test_generate_pdf_requires_title_and_content(client):
    response = client.post("/api/generate-pdf", json={"title": "Empty"})
    assert response.status_code == 400
    assert response.json()["message"] == localize("pdf_fields_required")


def test_render_failure_returns_html(client, monkeypatch):
    def broken(document):
        raise PdfRenderError("1 error(s) while rendering the document")

    monkeypatch.setattr(documents, "render_pdf", broken)

    response = client.post("/api/generate-pdf", json=REPORT)

    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] is True
    assert body["type"] == "html"
    assert "<strong>grew</strong>" in body["html"]
    assert body["error"] == "1 error(s) while rendering the document"


def test_markdown_to_html_tables_and_emphasis():
    html = markdown_to_html(REPORT["content"])
    assert "<h1>Summary</h1>" in html
    assert "<strong>grew</strong>" in html
    assert "<table>" in html
    assert "<li>one</li>" in html


def test_html_document_escapes_title_and_dates():
    document = html_document("<b>R&D</b>", "<p>x</p>", "cv", today=date(2025, 3, 7))
    assert "<h1>&lt;b&gt;R&amp;D&lt;/b&gt;</h1>" in document
    assert "Generated on 3/7/2025" in document
    assert "#3498db" in document


def test_unknown_document_type_uses_base_styles():
    assert styles_for("memo") == styles_for("document")


def test_pdf_filename():
    assert pdf_filename("Zpráva 2025/Q1") == "Zpr_va_2025_Q1.pdf"
