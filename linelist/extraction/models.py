from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from linelist.documents.models import Document, EnrichmentRole
from linelist.profiles.resolver import ResolvedProfile

ROLE_ORDER: tuple[EnrichmentRole, ...] = (
    EnrichmentRole.SECONDARY_PROCESS,
    EnrichmentRole.MATERIAL,
    EnrichmentRole.CORROSION,
)


@dataclass(frozen=True)
class ExtractionRequest:
    """Everything sent in one submission.

    The profile is a snapshot; include_area always comes from it.
    """

    primary: Document
    resolved_profile: ResolvedProfile
    enrichments: dict[EnrichmentRole, Document] = field(default_factory=dict)

    @property
    def include_area(self) -> bool:
        return self.resolved_profile.include_area

    @property
    def enrichment_roles(self) -> tuple[EnrichmentRole, ...]:
        return tuple(role for role in ROLE_ORDER if role in self.enrichments)


@dataclass(frozen=True)
class JobHandle:
    """Ticket for work the backend deferred.

    Carries the profile snapshot the job was submitted with, so a later
    resume segments identifiers with the same grammar.
    """

    job_id: str
    submitted_at: datetime
    enrichment_roles: tuple[EnrichmentRole, ...] = ()
    resolved_profile: ResolvedProfile | None = None


@dataclass(frozen=True)
class Immediate:
    """The backend finished synchronously."""

    payload: dict[str, Any]
    enrichment_roles: tuple[EnrichmentRole, ...] = ()


@dataclass(frozen=True)
class Deferred:
    """The backend queued the work and returned a ticket."""

    handle: JobHandle


SubmissionResult = Immediate | Deferred


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Processing:
    percent: int | None = None
    step_label: str = ""


@dataclass(frozen=True)
class Succeeded:
    payload: dict[str, Any]


@dataclass(frozen=True)
class Failed:
    reason: str


JobStatus = Pending | Processing | Succeeded | Failed
