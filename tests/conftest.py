import io

import pytest
from reportlab.lib.pagesizes import A3, landscape
from reportlab.pdfgen import canvas

from linelist.documents.models import PDF_MIME_TYPE, XLSX_MIME_TYPE, Document


@pytest.fixture()
def drawing_pdf_bytes() -> bytes:
    """Single-sheet drawing with a few line numbers on it."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A3))
    c.drawString(72, 720, "2-D-5777-033842")
    c.drawString(72, 690, "3-D-5778-033842")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def two_sheet_pdf_bytes() -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A3))
    c.drawString(72, 720, "Sheet 1 of 2")
    c.showPage()
    c.drawString(72, 720, "Sheet 2 of 2")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def drawing(drawing_pdf_bytes: bytes) -> Document:
    return Document(filename="P-101.pdf", content=drawing_pdf_bytes, mime_type=PDF_MIME_TYPE)


@pytest.fixture()
def pms_sheet() -> Document:
    return Document(filename="pms.xlsx", content=b"PK\x03\x04", mime_type=XLSX_MIME_TYPE)
