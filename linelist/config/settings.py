from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "designiq"
    db_username: str = "designiq"
    db_password: str = "secret"

    extraction_backend: str = "http"
    extraction_base_url: str = "http://localhost:8000/api/v1"
    submit_path: str = "/designiq/lists/upload_pid/"
    status_path: str = "/designiq/lists/task_status/{job_id}/"
    access_token: str = ""

    request_timeout_seconds: int = Field(default=10, gt=0)
    upload_timeout_seconds: int = Field(default=1200, gt=0)

    poll_interval_seconds: float = Field(default=3.0, gt=0)
    max_poll_attempts: int = Field(default=100, ge=1)

    pdf_engine: str = "pdfplumber"

    profile_store: str = "json"
    profile_store_path: str = "line_format_profiles.json"
    profile_scope_key: str = "designiq_line_format_config"

    export_dir: str = "exports"

    @property
    def poll_ceiling_seconds(self) -> float:
        """Longest time a job is polled before it is reported as timed out."""
        return self.poll_interval_seconds * self.max_poll_attempts
