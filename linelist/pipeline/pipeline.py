from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from linelist.documents.models import EnrichmentRole
from linelist.export.normalizer import OrderedRecord
from linelist.extraction.cancellation import CancelToken
from linelist.extraction.models import ExtractionRequest, SubmissionResult
from linelist.grammar.compiler import CompositeMatcher
from linelist.merge.models import MergeResult
from linelist.polling.models import ProgressSnapshot
from linelist.profiles.resolver import ResolvedProfile

ProgressCallback = Callable[[ProgressSnapshot], None]


@dataclass(slots=True)
class PipelineContext:
    resolved_profile: ResolvedProfile
    request: ExtractionRequest | None = None
    cancel_token: CancelToken | None = None
    on_progress: ProgressCallback | None = None
    matcher: CompositeMatcher | None = None
    submission: SubmissionResult | None = None
    job_id: str | None = None
    payload: dict[str, Any] | None = None
    enrichment_roles: tuple[EnrichmentRole, ...] = ()
    merge_result: MergeResult | None = None
    rows: list[OrderedRecord] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
