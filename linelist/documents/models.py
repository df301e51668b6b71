import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

PDF_MIME_TYPE = "application/pdf"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MIME_TYPE = "application/vnd.ms-excel"


class EnrichmentRole(str, Enum):
    """Supporting document kinds that add columns to the primary extraction."""

    SECONDARY_PROCESS = "secondary_process"  # HMB / PFD
    MATERIAL = "material"  # PMS
    CORROSION = "corrosion"  # NACE report

    @property
    def form_field(self) -> str:
        return _FORM_FIELDS[self]


_FORM_FIELDS: dict[EnrichmentRole, str] = {
    EnrichmentRole.SECONDARY_PROCESS: "hmb_file",
    EnrichmentRole.MATERIAL: "pms_file",
    EnrichmentRole.CORROSION: "nace_file",
}

PRIMARY_FORM_FIELD = "pid_file"


@dataclass(frozen=True)
class Document:
    """An uploaded file held in memory."""

    filename: str
    content: bytes
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "Document":
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            mime_type=mime_type or guessed or "application/octet-stream",
        )


@dataclass(frozen=True)
class DocumentInfo:
    """What the inspector learned about a PDF before upload."""

    page_count: int
