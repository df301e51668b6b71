"""Interprets status responses from the extraction backend."""

from typing import Any

from linelist.extraction.exceptions import StatusPayloadError
from linelist.extraction.models import Failed, JobStatus, Pending, Processing, Succeeded

_PENDING_STATES = frozenset({"PENDING", "RETRY", "RECEIVED"})
_PROCESSING_STATES = frozenset({"PROCESSING", "PROGRESS", "STARTED"})


def parse_status(data: Any) -> JobStatus:
    """Build a JobStatus from ``{state, percent?, status?, result?, error?}``.

    Raises:
        StatusPayloadError: if the payload is not an object or the state is unknown.
    """
    if not isinstance(data, dict):
        raise StatusPayloadError("Status response must be an object")
    state = data.get("state")
    if not isinstance(state, str):
        raise StatusPayloadError("Status response is missing 'state'")
    state = state.upper()

    if state in _PENDING_STATES:
        return Pending()
    if state in _PROCESSING_STATES:
        return Processing(
            percent=_parse_percent(data.get("percent")),
            step_label=str(data.get("status") or ""),
        )
    if state == "SUCCESS":
        result = data.get("result")
        if not isinstance(result, dict):
            raise StatusPayloadError("SUCCESS response must carry a 'result' object")
        return Succeeded(payload=result)
    if state == "FAILURE":
        return Failed(reason=str(data.get("error") or data.get("status") or "Extraction failed"))
    raise StatusPayloadError(f"Unknown job state {state!r}")


def _parse_percent(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = int(float(raw))
    except (TypeError, ValueError):
        return None
    return max(0, min(100, value))
