from linelist.merge.merger import merge
from linelist.merge.models import (
    EnrichmentSource,
    ExtractedRecord,
    MergeResult,
    MergeSummary,
    MergeWarning,
    SourceStatus,
)
from linelist.merge.payload import parse_result_payload

__all__ = [
    "EnrichmentSource",
    "ExtractedRecord",
    "MergeResult",
    "MergeSummary",
    "MergeWarning",
    "SourceStatus",
    "merge",
    "parse_result_payload",
]
