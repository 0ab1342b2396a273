"""Runtime settings loaded from the environment."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ExportFormat


class Settings(BaseSettings):
    """Settings read from ``STATEMENT_LEDGER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STATEMENT_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Fragments whose vertical coordinates differ by at most this many
    # document units share a logical line. Global, never per bank.
    line_y_tolerance: int = 4

    # Non-blank lines inspected when looking for a known column header set
    header_scan_lines: int = 10

    log_level: str = "INFO"
    default_export_format: ExportFormat = ExportFormat.INFLOW_OUTFLOW


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
