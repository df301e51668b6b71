import io

import pdfplumber

from linelist.documents.base import BaseDocumentInspector
from linelist.documents.exceptions import DocumentInspectionError
from linelist.documents.models import DocumentInfo


class PdfPlumberInspector(BaseDocumentInspector):
    """Inspects PDFs using pdfplumber."""

    def inspect(self, pdf_bytes: bytes) -> DocumentInfo:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return DocumentInfo(page_count=len(pdf.pages))
        except Exception as exc:
            raise DocumentInspectionError(f"pdfplumber could not open PDF: {exc}") from exc
