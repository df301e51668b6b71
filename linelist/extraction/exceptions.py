class BackendError(Exception):
    """Base exception for transport-level failures talking to the extraction backend."""


class BackendTimeoutError(BackendError):
    """Raised when the backend does not answer within the request timeout."""


class BackendUnavailableError(BackendError):
    """Raised when the backend cannot be reached at all."""


class BackendAuthError(BackendError):
    """Raised when the backend rejects the credential (401/403)."""


class BackendRejectedError(BackendError):
    """Raised when the backend answers with an error status."""

    def __init__(self, server_message: str, status_code: int | None = None) -> None:
        self.server_message = server_message
        self.status_code = status_code
        super().__init__(server_message)


class StatusPayloadError(BackendError):
    """Raised when a status response cannot be interpreted."""


class SubmissionError(Exception):
    """Base exception for errors that end a submission."""


class UnsupportedPrimaryTypeError(SubmissionError):
    """Raised when the primary document is not a recognized drawing format."""


class UnsupportedEnrichmentTypeError(SubmissionError):
    """Raised when an enrichment document is not PDF or Excel."""


class AuthRequiredError(SubmissionError):
    """Raised when no usable credential is available."""


class SubmissionTimeoutError(SubmissionError):
    """Raised when the upload/processing request exceeds the long timeout."""


class NetworkUnavailableError(SubmissionError):
    """Raised when the backend cannot be reached."""


class ServerRejectedError(SubmissionError):
    """Raised when the backend refuses the submission."""

    def __init__(self, server_message: str) -> None:
        self.server_message = server_message
        super().__init__(f"Server rejected the submission: {server_message}")


class SubmissionCancelledError(SubmissionError):
    """Raised when the caller cancels before a job handle was obtained."""
