from linelist.config.settings import Settings
from linelist.extraction.client_base import BaseExtractionClient
from linelist.extraction.example_client_adapter import ExampleExtractionClient
from linelist.extraction.httpx_client_adapter import HttpxExtractionClient


class ExtractionClientFactory:
    """Creates the configured extraction backend client."""

    BACKENDS: tuple[str, ...] = ("example", "http")

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractionClient:
        backend = settings.extraction_backend.lower()
        if backend == "example":
            return ExampleExtractionClient()
        if backend == "http":
            base_url = settings.extraction_base_url.strip()
            if not base_url:
                raise ValueError("extraction_base_url is required for extraction_backend=http")
            return HttpxExtractionClient(
                base_url=base_url,
                submit_path=settings.submit_path,
                status_path=settings.status_path,
            )
        raise ValueError(
            f"Unknown extraction backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
