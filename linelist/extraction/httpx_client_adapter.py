from typing import Any

import httpx

from linelist.documents.models import Document
from linelist.extraction.client_base import BaseExtractionClient
from linelist.extraction.exceptions import (
    BackendAuthError,
    BackendRejectedError,
    BackendTimeoutError,
    BackendUnavailableError,
)


class HttpxExtractionClient(BaseExtractionClient):
    """Extraction backend client built on httpx."""

    def __init__(
        self,
        *,
        base_url: str,
        submit_path: str,
        status_path: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._submit_path = submit_path
        self._status_path = status_path
        self._client = httpx.Client(base_url=base_url, transport=transport)

    def submit(
        self,
        *,
        files: dict[str, Document],
        data: dict[str, str],
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        multipart = {
            field: (doc.filename, doc.content, doc.mime_type) for field, doc in files.items()
        }
        return self._send(
            "POST",
            self._submit_path,
            token=token,
            timeout_seconds=timeout_seconds,
            files=multipart,
            data=data,
        )

    def get_status(
        self,
        job_id: str,
        *,
        token: str,
        timeout_seconds: float,
    ) -> dict[str, Any]:
        return self._send(
            "GET",
            self._status_path.format(job_id=job_id),
            token=token,
            timeout_seconds=timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def _send(
        self,
        method: str,
        path: str,
        *,
        token: str,
        timeout_seconds: float,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            response = self._client.request(
                method,
                path,
                headers={"Authorization": f"Bearer {token}"},
                timeout=timeout_seconds,
                **kwargs,
            )
        except httpx.TimeoutException as exc:
            raise BackendTimeoutError(f"Request to {path} timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise BackendUnavailableError(f"Backend unreachable at {path}: {exc}") from exc

        if response.status_code in (401, 403):
            raise BackendAuthError(f"Backend refused credential ({response.status_code})")
        if response.is_error:
            raise BackendRejectedError(
                _server_message(response), status_code=response.status_code
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise BackendRejectedError(
                f"Backend returned invalid JSON: {exc}", status_code=response.status_code
            ) from exc
        if not isinstance(body, dict):
            raise BackendRejectedError(
                "Backend response must be a JSON object", status_code=response.status_code
            )
        return body


def _server_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("detail", "error", "message"):
            value = body.get(key)
            if value:
                return str(value)
    return response.reason_phrase or f"HTTP {response.status_code}"
