from dataclasses import dataclass, field
from enum import Enum

from linelist.documents.models import EnrichmentRole
from linelist.merge.fields import IDENTIFIER_FIELD

PRIMARY_SOURCE = "primary"
TOTAL_ENRICHMENT_SOURCES = len(EnrichmentRole)

Row = dict[str, str]


class SourceStatus(str, Enum):
    SUCCEEDED = "succeeded"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class EnrichmentSource:
    """What one enrichment source delivered."""

    status: SourceStatus
    rows: tuple[Row, ...] = ()
    reason: str = ""

    @classmethod
    def succeeded(cls, rows: list[Row]) -> "EnrichmentSource":
        return cls(status=SourceStatus.SUCCEEDED, rows=tuple(rows))

    @classmethod
    def absent(cls) -> "EnrichmentSource":
        return cls(status=SourceStatus.ABSENT)

    @classmethod
    def failed(cls, reason: str) -> "EnrichmentSource":
        return cls(status=SourceStatus.FAILED, reason=reason)


@dataclass(frozen=True)
class ExtractedRecord:
    """One merged line with every base and enrichment column present."""

    base_fields: dict[str, str]
    enrichment_fields: dict[str, str]
    provenance: frozenset[str] = frozenset({PRIMARY_SOURCE})

    @property
    def identifier(self) -> str:
        return self.base_fields.get(IDENTIFIER_FIELD, "")


@dataclass(frozen=True)
class MergeWarning:
    """Non-fatal notice that some enrichment sources contributed nothing."""

    message: str
    missing_sources: int


@dataclass(frozen=True)
class MergeSummary:
    succeeded: tuple[EnrichmentRole, ...] = ()
    failed: dict[EnrichmentRole, str] = field(default_factory=dict)
    absent: tuple[EnrichmentRole, ...] = ()
    duplicates_replaced: int = 0

    @property
    def enriched_count(self) -> int:
        return len(self.succeeded)

    def describe(self) -> str:
        return f"enriched with {self.enriched_count} of {TOTAL_ENRICHMENT_SOURCES} sources"


@dataclass(frozen=True)
class MergeResult:
    records: list[ExtractedRecord]
    summary: MergeSummary
    warning: MergeWarning | None = None
