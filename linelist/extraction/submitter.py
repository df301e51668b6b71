"""Packages documents and grammar into one backend submission."""

import json
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
from typing import Any

from linelist.documents.base import BaseDocumentInspector
from linelist.documents.exceptions import DocumentInspectionError
from linelist.documents.models import (
    PDF_MIME_TYPE,
    PRIMARY_FORM_FIELD,
    XLS_MIME_TYPE,
    XLSX_MIME_TYPE,
    Document,
)
from linelist.extraction.cancellation import CancelToken
from linelist.extraction.client_base import BaseExtractionClient
from linelist.extraction.exceptions import (
    AuthRequiredError,
    BackendAuthError,
    BackendRejectedError,
    BackendTimeoutError,
    BackendUnavailableError,
    NetworkUnavailableError,
    ServerRejectedError,
    SubmissionCancelledError,
    SubmissionTimeoutError,
    UnsupportedEnrichmentTypeError,
    UnsupportedPrimaryTypeError,
)
from linelist.extraction.models import (
    Deferred,
    ExtractionRequest,
    Immediate,
    JobHandle,
    SubmissionResult,
)
from linelist.logging.logger import Log
from linelist.profiles.codec import submission_config

PRIMARY_MIME_TYPES = frozenset({PDF_MIME_TYPE})
ENRICHMENT_MIME_TYPES = frozenset({PDF_MIME_TYPE, XLSX_MIME_TYPE, XLS_MIME_TYPE})

TokenProvider = Callable[[], str | None]

_CANCEL_CHECK_SECONDS = 0.2


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ExtractionSubmitter:
    """Validates a request locally, then uploads it with the long timeout."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        inspector: BaseDocumentInspector,
        token_provider: TokenProvider,
        upload_timeout_seconds: float,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._client = client
        self._inspector = inspector
        self._token_provider = token_provider
        self._upload_timeout_seconds = upload_timeout_seconds
        self._clock = clock

    def submit(
        self,
        request: ExtractionRequest,
        cancel_token: CancelToken | None = None,
    ) -> SubmissionResult:
        """Submit one extraction request.

        Raises:
            AuthRequiredError: no credential, or the backend refused it.
            UnsupportedPrimaryTypeError: primary is not a readable PDF.
            UnsupportedEnrichmentTypeError: an enrichment is not PDF/Excel.
            SubmissionTimeoutError: the upload exceeded the long timeout.
            NetworkUnavailableError: the backend could not be reached.
            ServerRejectedError: the backend refused the submission.
            SubmissionCancelledError: cancelled before a job handle was obtained.
        """
        token = self._require_token()
        self._check_primary(request.primary)
        self._check_enrichments(request)
        _raise_if_cancelled(cancel_token)

        roles = request.enrichment_roles
        files, data = self._build_form(request)
        Log.info(
            f"Submitting {request.primary.filename} "
            f"({request.primary.size_bytes / 1024 / 1024:.2f} MB) "
            f"with {len(roles)} enrichment document(s), format '{request.resolved_profile.name}'"
        )

        try:
            response = self._upload(files, data, token, cancel_token)
        except BackendTimeoutError as exc:
            raise SubmissionTimeoutError(
                "Upload timed out. The PDF might be too large or complex. "
                "Please try a smaller file or contact support."
            ) from exc
        except BackendUnavailableError as exc:
            raise NetworkUnavailableError(
                "No response from server. Please check your connection and try again."
            ) from exc
        except BackendAuthError as exc:
            raise AuthRequiredError(
                "Authentication was rejected by the server. Please log in again."
            ) from exc
        except BackendRejectedError as exc:
            raise ServerRejectedError(exc.server_message) from exc

        _raise_if_cancelled(cancel_token)
        return self._interpret(response, request)

    def close(self) -> None:
        self._client.close()

    def _upload(
        self,
        files: dict[str, Document],
        data: dict[str, str],
        token: str,
        cancel_token: CancelToken | None,
    ) -> dict[str, Any]:
        """Run the upload, returning early if the caller cancels while it is in flight.

        A cancelled upload keeps running on its worker thread until the
        transport returns; its response is discarded.
        """
        kwargs: dict[str, Any] = {
            "files": files,
            "data": data,
            "token": token,
            "timeout_seconds": self._upload_timeout_seconds,
        }
        if cancel_token is None:
            return self._client.submit(**kwargs)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="linelist-upload")
        try:
            future = executor.submit(self._client.submit, **kwargs)
            while True:
                try:
                    return future.result(timeout=_CANCEL_CHECK_SECONDS)
                except FutureTimeoutError:
                    if cancel_token.cancelled:
                        Log.warning("Upload cancelled; its response will be discarded")
                        raise SubmissionCancelledError(
                            "Submission cancelled before a job was created"
                        ) from None
        finally:
            executor.shutdown(wait=False)

    def _require_token(self) -> str:
        token = self._token_provider()
        if not token:
            raise AuthRequiredError("Authentication token not found. Please log in again.")
        return token

    def _check_primary(self, primary: Document) -> None:
        if primary.mime_type not in PRIMARY_MIME_TYPES:
            raise UnsupportedPrimaryTypeError(
                f"'{primary.filename}' is {primary.mime_type}; please upload a PDF drawing"
            )
        try:
            info = self._inspector.inspect(primary.content)
        except DocumentInspectionError as exc:
            raise UnsupportedPrimaryTypeError(
                f"'{primary.filename}' is not a readable PDF"
            ) from exc
        if info.page_count < 1:
            raise UnsupportedPrimaryTypeError(f"'{primary.filename}' has no pages")
        Log.debug(f"Primary drawing {primary.filename} has {info.page_count} page(s)")

    def _check_enrichments(self, request: ExtractionRequest) -> None:
        for role, document in request.enrichments.items():
            if document.mime_type not in ENRICHMENT_MIME_TYPES:
                raise UnsupportedEnrichmentTypeError(
                    f"'{document.filename}' ({role.value}) is {document.mime_type}; "
                    "enrichment documents must be PDF or Excel"
                )

    def _build_form(
        self, request: ExtractionRequest
    ) -> tuple[dict[str, Document], dict[str, str]]:
        files = {PRIMARY_FORM_FIELD: request.primary}
        for role in request.enrichment_roles:
            files[role.form_field] = request.enrichments[role]
        data = {
            "list_type": "line_list",
            "format_type": request.resolved_profile.name,
            "include_area": "true" if request.include_area else "false",
            "line_format_config": json.dumps(
                submission_config(request.resolved_profile.profile)
            ),
            "enrichment_sources": ",".join(role.value for role in request.enrichment_roles),
        }
        return files, data

    def _interpret(
        self, response: dict[str, Any], request: ExtractionRequest
    ) -> SubmissionResult:
        roles = request.enrichment_roles
        task_id = response.get("task_id")
        if task_id:
            handle = JobHandle(
                job_id=str(task_id),
                submitted_at=self._clock(),
                enrichment_roles=roles,
                resolved_profile=request.resolved_profile,
            )
            Log.info(f"Backend deferred extraction as job {handle.job_id}")
            return Deferred(handle=handle)
        if response.get("success") is False:
            message = response.get("message") or response.get("error") or "Extraction failed"
            raise ServerRejectedError(str(message))
        Log.info("Backend completed extraction synchronously")
        return Immediate(payload=response, enrichment_roles=roles)


def _raise_if_cancelled(cancel_token: CancelToken | None) -> None:
    if cancel_token is not None and cancel_token.cancelled:
        raise SubmissionCancelledError("Submission cancelled before a job was created")
