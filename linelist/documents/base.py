from abc import ABC, abstractmethod

from linelist.documents.models import DocumentInfo


class BaseDocumentInspector(ABC):
    """Contract for all PDF inspection adapters."""

    @abstractmethod
    def inspect(self, pdf_bytes: bytes) -> DocumentInfo:
        """Open PDF bytes and report their page count.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            DocumentInfo for the drawing.

        Raises:
            DocumentInspectionError: if the bytes are not a readable PDF.
        """
