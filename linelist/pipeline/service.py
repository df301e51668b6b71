from pathlib import Path

from linelist.config.settings import Settings
from linelist.documents.factory import DocumentInspectorFactory
from linelist.documents.models import Document, EnrichmentRole
from linelist.export.xlsx_exporter import XlsxExporter
from linelist.extraction.cancellation import CancelToken
from linelist.extraction.client_base import BaseExtractionClient
from linelist.extraction.factory import ExtractionClientFactory
from linelist.extraction.models import Deferred, ExtractionRequest, JobHandle
from linelist.extraction.submitter import ExtractionSubmitter, TokenProvider
from linelist.logging.logger import Log
from linelist.pipeline.models import ExtractionReport
from linelist.pipeline.pipeline import PipelineContext, PipelineStep, ProgressCallback
from linelist.pipeline.steps import (
    AwaitResultStep,
    ClaimResultStep,
    MergeStep,
    NormalizeStep,
    PollerFactory,
    RecordConsumedStep,
    SubmitStep,
    ValidateGrammarStep,
)
from linelist.polling.poller import JobStatusPoller
from linelist.profiles.factory import ProfileStoreFactory
from linelist.profiles.session import ProfileSession


class ExtractionService:
    """Runs grammar -> submit -> await -> merge -> normalize for one drawing.

    The active profile is read from the session once, when a run starts.
    """

    def __init__(
        self,
        session: ProfileSession,
        submitter: ExtractionSubmitter,
        poller_factory: PollerFactory,
        exporter: XlsxExporter,
    ) -> None:
        self._session = session
        self._submitter = submitter
        self._poller_factory = poller_factory
        self._exporter = exporter
        self._consumed_job_ids: set[str] = set()

    @property
    def session(self) -> ProfileSession:
        return self._session

    def extract(
        self,
        primary: Document,
        enrichments: dict[EnrichmentRole, Document] | None = None,
        cancel_token: CancelToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionReport:
        """Extract the line list from one drawing and its enrichment documents."""
        resolved = self._session.current()
        context = PipelineContext(
            resolved_profile=resolved,
            request=ExtractionRequest(
                primary=primary,
                resolved_profile=resolved,
                enrichments=dict(enrichments or {}),
            ),
            cancel_token=cancel_token,
            on_progress=on_progress,
        )
        steps: list[PipelineStep] = [
            ValidateGrammarStep(),
            SubmitStep(self._submitter),
            AwaitResultStep(self._poller_factory),
            ClaimResultStep(self._consumed_job_ids),
            MergeStep(),
            NormalizeStep(),
            RecordConsumedStep(self._consumed_job_ids),
        ]
        return self._run(steps, context)

    def resume(
        self,
        handle: JobHandle,
        cancel_token: CancelToken | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionReport:
        """Poll a job submitted earlier, e.g. after the poll ceiling was reached.

        The job keeps the profile it was submitted with. Handles that carry
        no snapshot fall back to the current session selection.
        """
        resolved = handle.resolved_profile or self._session.current()
        context = PipelineContext(
            resolved_profile=resolved,
            submission=Deferred(handle=handle),
            cancel_token=cancel_token,
            on_progress=on_progress,
        )
        steps: list[PipelineStep] = [
            ValidateGrammarStep(),
            AwaitResultStep(self._poller_factory),
            ClaimResultStep(self._consumed_job_ids),
            MergeStep(),
            NormalizeStep(),
            RecordConsumedStep(self._consumed_job_ids),
        ]
        return self._run(steps, context)

    def export(self, report: ExtractionReport) -> Path:
        return self._exporter.export(report.records)

    def close(self) -> None:
        """Release the backend transport."""
        self._submitter.close()

    def __enter__(self) -> "ExtractionService":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _run(self, steps: list[PipelineStep], context: PipelineContext) -> ExtractionReport:
        for step in steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"Extraction failed at {type(step).__name__}: {exc}")
                raise
        merge_result = context.merge_result
        if merge_result is None:
            raise RuntimeError("Extraction pipeline finished without a merge result")
        if merge_result.warning is not None:
            Log.warning(merge_result.warning.message)
        return ExtractionReport(
            profile_name=context.resolved_profile.name,
            job_id=context.job_id,
            records=merge_result.records,
            rows=context.rows,
            summary=merge_result.summary,
            warning=merge_result.warning,
        )


def _poller_factory(
    client: BaseExtractionClient,
    settings: Settings,
    token_provider: TokenProvider,
) -> PollerFactory:
    def create(handle: JobHandle) -> JobStatusPoller:
        return JobStatusPoller(
            client,
            handle,
            token=token_provider() or "",
            interval_seconds=settings.poll_interval_seconds,
            max_attempts=settings.max_poll_attempts,
            timeout_seconds=settings.request_timeout_seconds,
        )

    return create


def build_service(
    settings: Settings,
    token_provider: TokenProvider | None = None,
) -> ExtractionService:
    """Build an ExtractionService with the configured adapters.

    Without a token provider the service uses ``settings.access_token``.
    """
    Log.configure(settings.log_level)
    if token_provider is None:
        token_provider = lambda: settings.access_token or None  # noqa: E731

    client = ExtractionClientFactory.create(settings)
    submitter = ExtractionSubmitter(
        client=client,
        inspector=DocumentInspectorFactory.create(settings),
        token_provider=token_provider,
        upload_timeout_seconds=settings.upload_timeout_seconds,
    )
    session = ProfileSession(
        ProfileStoreFactory.create(settings),
        scope=settings.profile_scope_key,
    )
    session.load()
    return ExtractionService(
        session=session,
        submitter=submitter,
        poller_factory=_poller_factory(client, settings, token_provider),
        exporter=XlsxExporter(Path(settings.export_dir)),
    )
