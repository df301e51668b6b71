"""Example extraction client adapter.

Use this module as a reference when implementing new backend transports.
Implement BaseExtractionClient and register the backend in ExtractionClientFactory.
"""

from typing import Any, ClassVar

from linelist.documents.models import Document, EnrichmentRole
from linelist.extraction.client_base import BaseExtractionClient


class ExampleExtractionClient(BaseExtractionClient):
    """Example adapter that answers synchronously with a fixed extraction.

    No network calls. Useful for local development, tests, and as a template
    for building real backend adapters.
    """

    DEFAULT_LINES: ClassVar[list[dict[str, str]]] = [
        {
            "original_detection": "2-D-5777-033842",
            "size": "2",
            "fluid_code": "D",
            "sequence_no": "5777",
            "pipr_class": "033842",
            "from": "V-100",
            "to": "V-200",
        },
    ]

    def __init__(self) -> None:
        self.submissions: list[dict[str, str]] = []

    def submit(
        self,
        *,
        files: dict[str, Document],
        data: dict[str, str],
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        _ = token, timeout_seconds
        self.submissions.append(dict(data))
        return {
            "success": True,
            "extracted_lines": [dict(line) for line in self.DEFAULT_LINES],
            "enrichment": {
                role.value: [] for role in EnrichmentRole if role.form_field in files
            },
        }

    def get_status(
        self,
        job_id: str,
        *,
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        _ = job_id, token, timeout_seconds
        return {
            "state": "SUCCESS",
            "result": {"extracted_lines": [dict(line) for line in self.DEFAULT_LINES]},
        }
