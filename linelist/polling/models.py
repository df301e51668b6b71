from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from linelist.polling.exceptions import JobFailedError, PollCancelledError, PollTimedOutError


class PollState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (PollState.IDLE, PollState.POLLING)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Latest progress seen for a job."""

    percent: int = 0
    step_label: str = ""


@dataclass(frozen=True)
class PollOutcome:
    """Where the poller ended up and how it got there."""

    job_id: str
    state: PollState
    attempts: int
    payload: dict[str, Any] | None = None
    reason: str = ""
    progress: ProgressSnapshot = field(default_factory=ProgressSnapshot)

    def raise_for_state(self) -> dict[str, Any]:
        """Return the result payload, or raise the PollError matching the state."""
        if self.state is PollState.SUCCEEDED and self.payload is not None:
            return self.payload
        if self.state is PollState.TIMED_OUT:
            raise PollTimedOutError(
                f"Processing never finished: job {self.job_id} was still running after "
                f"{self.attempts} status checks. It may complete later on the server."
            )
        if self.state is PollState.CANCELLED:
            raise PollCancelledError(f"Stopped waiting for job {self.job_id}")
        if self.state is PollState.FAILED:
            raise JobFailedError(self.job_id, self.reason)
        raise RuntimeError(f"Job {self.job_id} is not finished (state={self.state.value})")
