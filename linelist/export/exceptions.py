class ExportError(Exception):
    """Base exception for normalization and export failures."""


class RecordShapeError(ExportError):
    """Raised when a record does not carry exactly the contracted columns."""

    def __init__(self, identifier: str, missing: list[str], unknown: list[str]) -> None:
        self.identifier = identifier
        self.missing = missing
        self.unknown = unknown
        parts = []
        if missing:
            parts.append(f"missing {missing}")
        if unknown:
            parts.append(f"unknown {unknown}")
        super().__init__(f"Record '{identifier}' has the wrong shape: {', '.join(parts)}")
