from collections.abc import Callable

from linelist.export.normalizer import normalize
from linelist.extraction.models import Deferred, Immediate, JobHandle
from linelist.extraction.submitter import ExtractionSubmitter
from linelist.grammar.compiler import compile_profile
from linelist.logging.logger import Log
from linelist.merge.exceptions import ResultAlreadyConsumedError
from linelist.merge.merger import merge
from linelist.merge.payload import parse_result_payload
from linelist.pipeline.pipeline import PipelineContext, PipelineStep
from linelist.polling.exceptions import PollTimedOutError
from linelist.polling.poller import JobStatusPoller

PollerFactory = Callable[[JobHandle], JobStatusPoller]


class ValidateGrammarStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.matcher = compile_profile(context.resolved_profile.profile)
        Log.info(
            f"Using line format '{context.resolved_profile.name}' "
            f"({context.matcher.template})"
        )
        return context


class SubmitStep(PipelineStep):
    def __init__(self, submitter: ExtractionSubmitter) -> None:
        self._submitter = submitter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.request is None:
            raise ValueError("PipelineContext.request must be set before submission")
        context.submission = self._submitter.submit(context.request, context.cancel_token)
        return context


class AwaitResultStep(PipelineStep):
    """Passes an immediate result through; polls a deferred one to completion."""

    def __init__(self, poller_factory: PollerFactory) -> None:
        self._poller_factory = poller_factory

    def run(self, context: PipelineContext) -> PipelineContext:
        submission = context.submission
        if isinstance(submission, Immediate):
            context.payload = submission.payload
            context.enrichment_roles = submission.enrichment_roles
            return context
        if not isinstance(submission, Deferred):
            raise ValueError("PipelineContext.submission must be set before awaiting a result")

        handle = submission.handle
        poller = self._poller_factory(handle)
        if context.on_progress is not None:
            poller.subscribe(context.on_progress)
        outcome = poller.run(context.cancel_token)
        try:
            context.payload = outcome.raise_for_state()
        except PollTimedOutError as exc:
            exc.handle = handle
            raise
        context.job_id = handle.job_id
        context.enrichment_roles = handle.enrichment_roles
        return context


class ClaimResultStep(PipelineStep):
    """Refuses the result of a job that was already ingested."""

    def __init__(self, consumed_job_ids: set[str]) -> None:
        self._consumed_job_ids = consumed_job_ids

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.job_id is not None and context.job_id in self._consumed_job_ids:
            raise ResultAlreadyConsumedError(
                f"Results of job {context.job_id} were already ingested"
            )
        return context


class MergeStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.payload is None:
            raise ValueError("PipelineContext.payload must be set before merging")
        base_rows, enrichments = parse_result_payload(
            context.payload, context.enrichment_roles
        )
        context.merge_result = merge(base_rows, enrichments, matcher=context.matcher)
        return context


class NormalizeStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.merge_result is None:
            raise ValueError("PipelineContext.merge_result must be set before normalization")
        context.rows = normalize(context.merge_result.records)
        Log.info(f"Normalized {len(context.rows)} line record(s)")
        return context


class RecordConsumedStep(PipelineStep):
    """Marks a job's result as ingested once it has been merged and normalized."""

    def __init__(self, consumed_job_ids: set[str]) -> None:
        self._consumed_job_ids = consumed_job_ids

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.job_id is not None:
            self._consumed_job_ids.add(context.job_id)
        return context
