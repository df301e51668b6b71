from dataclasses import dataclass

from linelist.export.normalizer import OrderedRecord
from linelist.merge.models import ExtractedRecord, MergeSummary, MergeWarning


@dataclass(frozen=True)
class ExtractionReport:
    """Final output of one extraction run."""

    profile_name: str
    job_id: str | None
    records: list[ExtractedRecord]
    rows: list[OrderedRecord]
    summary: MergeSummary
    warning: MergeWarning | None = None

    @property
    def record_count(self) -> int:
        return len(self.records)
