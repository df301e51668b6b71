from abc import ABC, abstractmethod
from typing import Any

from linelist.documents.models import Document


class BaseExtractionClient(ABC):
    """Contract for transports that talk to the extraction backend."""

    @abstractmethod
    def submit(
        self,
        *,
        files: dict[str, Document],
        data: dict[str, str],
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        """Upload documents and return the decoded JSON response.

        Raises:
            BackendError: on any transport or HTTP failure.
        """

    @abstractmethod
    def get_status(
        self,
        job_id: str,
        *,
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        """Query one job and return the decoded JSON status response.

        Raises:
            BackendError: on any transport or HTTP failure.
        """

    def close(self) -> None:
        """Release transport resources. Adapters without any keep the default."""
