from linelist.extraction.models import JobHandle


class PollError(Exception):
    """Base exception for jobs that did not reach a successful terminal state."""


class PollTimedOutError(PollError):
    """Raised when the attempt ceiling is reached; the job may still run server-side.

    The extraction pipeline fills in ``handle`` so the caller can resume the
    job later.
    """

    handle: JobHandle | None = None


class JobFailedError(PollError):
    """Raised when the backend reports the job as failed."""

    def __init__(self, job_id: str, reason: str) -> None:
        self.job_id = job_id
        self.reason = reason
        super().__init__(f"Extraction job {job_id} failed: {reason}")


class PollCancelledError(PollError):
    """Raised when polling was abandoned by the caller."""
