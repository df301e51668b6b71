from linelist.config.settings import Settings
from linelist.documents.base import BaseDocumentInspector
from linelist.documents.pdfplumber_adapter import PdfPlumberInspector
from linelist.documents.pymupdf_adapter import PyMuPdfInspector


class DocumentInspectorFactory:
    """Creates the correct PDF inspector based on settings."""

    ADAPTERS: dict[str, type[BaseDocumentInspector]] = {
        "pdfplumber": PdfPlumberInspector,
        "pymupdf": PyMuPdfInspector,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentInspector:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
