import json
from unittest.mock import MagicMock

import httpx
import pytest

from linelist.documents.models import PDF_MIME_TYPE, Document
from linelist.extraction.example_client_adapter import ExampleExtractionClient
from linelist.extraction.exceptions import (
    BackendAuthError,
    BackendRejectedError,
    BackendTimeoutError,
    BackendUnavailableError,
)
from linelist.extraction.factory import ExtractionClientFactory
from linelist.extraction.httpx_client_adapter import HttpxExtractionClient

BASE_URL = "http://backend.test/api/v1"


def _client(handler) -> HttpxExtractionClient:  # type: ignore[no-untyped-def]
    return HttpxExtractionClient(
        base_url=BASE_URL,
        submit_path="/designiq/lists/upload_pid/",
        status_path="/designiq/lists/task_status/{job_id}/",
        transport=httpx.MockTransport(handler),
    )


def _make_settings(**overrides: object) -> MagicMock:
    settings = MagicMock()
    settings.extraction_backend = "http"
    settings.extraction_base_url = BASE_URL
    settings.submit_path = "/designiq/lists/upload_pid/"
    settings.status_path = "/designiq/lists/task_status/{job_id}/"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


class TestSubmit:
    def test_posts_multipart_with_bearer_token(self) -> None:
        seen: dict[str, httpx.Request] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"task_id": "job-1"})

        result = _client(handler).submit(
            files={"pid_file": Document("P-101.pdf", b"%PDF-1.4", PDF_MIME_TYPE)},
            data={"list_type": "line_list", "include_area": "false"},
            token="tok",
            timeout_seconds=1200,
        )

        request = seen["request"]
        body = request.content.decode("latin-1")
        assert result == {"task_id": "job-1"}
        assert request.method == "POST"
        assert request.url.path == "/api/v1/designiq/lists/upload_pid/"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert 'name="pid_file"; filename="P-101.pdf"' in body
        assert 'name="list_type"' in body

    def test_applies_per_request_timeout(self) -> None:
        seen: dict[str, httpx.Request] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={})

        _client(handler).submit(files={}, data={}, token="t", timeout_seconds=1200)

        assert seen["request"].extensions["timeout"]["read"] == 1200


class TestGetStatus:
    def test_formats_status_path(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/v1/designiq/lists/task_status/abc-123/"
            return httpx.Response(200, json={"state": "PENDING"})

        assert _client(handler).get_status("abc-123", token="t", timeout_seconds=10) == {
            "state": "PENDING"
        }


class TestErrorMapping:
    def _status(self, handler) -> None:  # type: ignore[no-untyped-def]
        _client(handler).get_status("job", token="t", timeout_seconds=10)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(BackendTimeoutError):
            self._status(handler)

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(BackendUnavailableError):
            self._status(handler)

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_rejected(self, status_code: int) -> None:
        with pytest.raises(BackendAuthError):
            self._status(lambda request: httpx.Response(status_code))

    def test_server_error_uses_detail_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"detail": "PDF is encrypted"})

        with pytest.raises(BackendRejectedError) as exc_info:
            self._status(handler)
        assert exc_info.value.server_message == "PDF is encrypted"
        assert exc_info.value.status_code == 400

    def test_server_error_without_body_uses_reason_phrase(self) -> None:
        with pytest.raises(BackendRejectedError, match="Internal Server Error"):
            self._status(lambda request: httpx.Response(500))

    def test_invalid_json(self) -> None:
        with pytest.raises(BackendRejectedError, match="invalid JSON"):
            self._status(lambda request: httpx.Response(200, content=b"<html>"))

    def test_non_object_json(self) -> None:
        with pytest.raises(BackendRejectedError, match="JSON object"):
            self._status(lambda request: httpx.Response(200, content=json.dumps([1]).encode()))


class TestExampleExtractionClient:
    def test_submit_answers_synchronously(self) -> None:
        client = ExampleExtractionClient()
        result = client.submit(
            files={"pid_file": Document("a.pdf", b"", PDF_MIME_TYPE)},
            data={"format_type": "onshore"},
            token="t",
            timeout_seconds=1,
        )
        assert result["success"] is True
        assert result["extracted_lines"][0]["original_detection"] == "2-D-5777-033842"
        assert result["enrichment"] == {}
        assert client.submissions == [{"format_type": "onshore"}]

    def test_submit_echoes_requested_enrichment_roles(self) -> None:
        client = ExampleExtractionClient()
        result = client.submit(
            files={
                "pid_file": Document("a.pdf", b"", PDF_MIME_TYPE),
                "pms_file": Document("pms.pdf", b"", PDF_MIME_TYPE),
            },
            data={},
            token="t",
            timeout_seconds=1,
        )
        assert result["enrichment"] == {"material": []}

    def test_status_is_always_success(self) -> None:
        result = ExampleExtractionClient().get_status("job", token="t", timeout_seconds=1)
        assert result["state"] == "SUCCESS"
        assert result["result"]["extracted_lines"]


class TestExtractionClientFactory:
    def test_creates_http_client(self) -> None:
        assert isinstance(ExtractionClientFactory.create(_make_settings()), HttpxExtractionClient)

    def test_creates_example_client(self) -> None:
        client = ExtractionClientFactory.create(_make_settings(extraction_backend="Example"))
        assert isinstance(client, ExampleExtractionClient)

    def test_http_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="extraction_base_url"):
            ExtractionClientFactory.create(_make_settings(extraction_base_url="  "))

    def test_raises_for_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown extraction backend"):
            ExtractionClientFactory.create(_make_settings(extraction_backend="grpc"))
