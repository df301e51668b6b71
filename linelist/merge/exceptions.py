class MergeError(Exception):
    """Base exception for merge failures."""


class ResultPayloadError(MergeError):
    """Raised when the primary extraction result has the wrong shape."""


class ResultAlreadyConsumedError(MergeError):
    """Raised when the results of a job are ingested a second time."""
