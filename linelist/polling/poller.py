import time
from collections.abc import Callable
from typing import Any

from linelist.extraction.cancellation import CancelToken
from linelist.extraction.client_base import BaseExtractionClient
from linelist.extraction.exceptions import (
    BackendAuthError,
    BackendRejectedError,
    BackendTimeoutError,
    BackendUnavailableError,
    StatusPayloadError,
)
from linelist.extraction.models import Failed, JobHandle, Processing, Succeeded
from linelist.extraction.status import parse_status
from linelist.logging.logger import Log
from linelist.polling.models import PollOutcome, PollState, ProgressSnapshot

ProgressObserver = Callable[[ProgressSnapshot], None]

_MAX_PROGRESS_BEFORE_SUCCESS = 99


class JobStatusPoller:
    """Poll loop for one job: query -> (terminal ? stop : sleep -> query).

    Queries are strictly sequential. Without an injected sleep function the
    pause between queries waits on the cancel token, so a cancel wakes it.
    """

    def __init__(
        self,
        client: BaseExtractionClient,
        handle: JobHandle,
        *,
        token: str,
        interval_seconds: float,
        max_attempts: int,
        timeout_seconds: float,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._handle = handle
        self._token = token
        self._interval_seconds = interval_seconds
        self._max_attempts = max_attempts
        self._timeout_seconds = timeout_seconds
        self._sleep = sleep

        self._state = PollState.IDLE
        self._attempts = 0
        self._progress = ProgressSnapshot()
        self._payload: dict[str, Any] | None = None
        self._reason = ""
        self._cancel_requested = False
        self._observers: list[ProgressObserver] = []

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def progress(self) -> ProgressSnapshot:
        return self._progress

    @property
    def outcome(self) -> PollOutcome:
        return PollOutcome(
            job_id=self._handle.job_id,
            state=self._state,
            attempts=self._attempts,
            payload=self._payload,
            reason=self._reason,
            progress=self._progress,
        )

    def subscribe(self, observer: ProgressObserver) -> None:
        self._observers.append(observer)

    def cancel(self) -> None:
        """Stop scheduling queries. Work already running on the server is left alone."""
        self._cancel_requested = True

    def run(self, cancel_token: CancelToken | None = None) -> PollOutcome:
        """Poll until a terminal state is reached and return the outcome."""
        if not self._state.is_terminal:
            Log.info(
                f"Polling job {self._handle.job_id} every {self._interval_seconds}s "
                f"(max {self._max_attempts} attempts)"
            )
        while True:
            if cancel_token is not None and cancel_token.cancelled:
                self.cancel()
            state = self.poll_once()
            if state.is_terminal:
                break
            self._pause(cancel_token)
        return self.outcome

    def _pause(self, cancel_token: CancelToken | None) -> None:
        if self._sleep is not None:
            self._sleep(self._interval_seconds)
        elif cancel_token is not None:
            cancel_token.wait(self._interval_seconds)
        else:
            time.sleep(self._interval_seconds)

    def poll_once(self) -> PollState:
        """Issue at most one status query and return the resulting state."""
        if self._state.is_terminal:
            return self._state
        self._state = PollState.POLLING
        if self._cancel_requested:
            self._finish(PollState.CANCELLED, reason="Cancelled by caller")
            return self._state

        self._attempts += 1
        try:
            raw = self._client.get_status(
                self._handle.job_id,
                token=self._token,
                timeout_seconds=self._timeout_seconds,
            )
            status = parse_status(raw)
        except (BackendTimeoutError, BackendUnavailableError) as exc:
            Log.warning(
                f"Status check {self._attempts} for job {self._handle.job_id} failed, "
                f"will retry: {exc}"
            )
            status = None
        except (BackendAuthError, BackendRejectedError, StatusPayloadError) as exc:
            self._finish(PollState.FAILED, reason=str(exc))
            return self._state

        if isinstance(status, Succeeded):
            self._payload = status.payload
            self._update_progress(100, "", final=True)
            self._finish(PollState.SUCCEEDED)
            return self._state
        if isinstance(status, Failed):
            self._finish(PollState.FAILED, reason=status.reason)
            return self._state
        if isinstance(status, Processing):
            self._update_progress(status.percent, status.step_label)

        if self._attempts >= self._max_attempts:
            self._finish(PollState.TIMED_OUT, reason="Attempt ceiling reached")
        return self._state

    def _finish(self, state: PollState, reason: str = "") -> None:
        self._state = state
        self._reason = reason
        log = Log.info if state is PollState.SUCCEEDED else Log.warning
        log(
            f"Job {self._handle.job_id} finished polling as {state.value} "
            f"after {self._attempts} attempt(s)" + (f": {reason}" if reason else "")
        )

    def _update_progress(self, percent: int | None, step_label: str, final: bool = False) -> None:
        current = self._progress
        if final:
            new_percent = 100
        elif percent is None:
            new_percent = current.percent
        else:
            new_percent = min(_MAX_PROGRESS_BEFORE_SUCCESS, max(current.percent, percent))
        snapshot = ProgressSnapshot(
            percent=new_percent,
            step_label=step_label or current.step_label,
        )
        if snapshot == current:
            return
        self._progress = snapshot
        Log.debug(f"Job {self._handle.job_id}: {snapshot.percent}% {snapshot.step_label}")
        for observer in self._observers:
            try:
                observer(snapshot)
            except Exception as exc:
                Log.warning(f"Progress observer failed: {exc}")
