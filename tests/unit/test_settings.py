import pytest
from pydantic import ValidationError

from linelist.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_timeouts(self) -> None:
        s = Settings()
        assert s.request_timeout_seconds == 10
        assert s.upload_timeout_seconds == 1200

    def test_default_poll_budget(self) -> None:
        s = Settings()
        assert s.poll_interval_seconds == 3.0
        assert s.max_poll_attempts == 100
        assert s.poll_ceiling_seconds == 300.0

    def test_default_backend_paths(self) -> None:
        s = Settings()
        assert s.submit_path == "/designiq/lists/upload_pid/"
        assert s.status_path.format(job_id="abc") == "/designiq/lists/task_status/abc/"

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_profile_store(self) -> None:
        s = Settings()
        assert s.profile_store == "json"
        assert s.profile_scope_key == "designiq_line_format_config"


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_extraction_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_BACKEND", "example")
        s = Settings()
        assert s.extraction_backend == "example"

    def test_loads_poll_interval(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.5")
        monkeypatch.setenv("MAX_POLL_ATTEMPTS", "4")
        s = Settings()
        assert s.poll_ceiling_seconds == 2.0

    def test_loads_access_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ACCESS_TOKEN", "tok-123")
        s = Settings()
        assert s.access_token == "tok-123"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_poll_attempts_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_POLL_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_negative_upload_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_TIMEOUT_SECONDS", "-1")
        with pytest.raises(ValidationError):
            Settings()
