import pymupdf

from linelist.documents.base import BaseDocumentInspector
from linelist.documents.exceptions import DocumentInspectionError
from linelist.documents.models import DocumentInfo


class PyMuPdfInspector(BaseDocumentInspector):
    """Inspects PDFs using PyMuPDF."""

    def inspect(self, pdf_bytes: bytes) -> DocumentInfo:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return DocumentInfo(page_count=doc.page_count)
        except Exception as exc:
            raise DocumentInspectionError(f"pymupdf could not open PDF: {exc}") from exc
