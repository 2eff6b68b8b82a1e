from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "flowboard"
    db_username: str = "flowboard"
    db_password: str = "secret"
    db_connect_timeout_seconds: int = 10
    db_statement_timeout_ms: int = 30000
    db_pool_timeout_seconds: float = 30.0

    storage_disk: str = "local"
    files_root: Path = Path("/app/files")
    storage_bucket: str = "client-files"
    max_upload_bytes: int = 10 * 1024 * 1024

    automation_webhook_url: str = ""
    io_timeout_seconds: float = 30.0
    retry_attempts: int = 3
    retry_backoff_seconds: float = 0.5

    data_source: str = "live"
    sheets_api_key: str = ""
    sheets_sheet_id: str = ""
    sheets_range: str = "Sheet1!A1:Z1000"
    sheets_base_url: str = "https://sheets.googleapis.com/v4"

    dashboard_refresh_seconds: int = 5
    recent_files_limit: int = 10
    recent_logs_limit: int = 50
