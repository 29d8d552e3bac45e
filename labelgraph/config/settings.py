"""Core application settings."""

from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Core application settings."""

    # Application Settings
    app_name: str = "LabelGraph - SPL document graph assembly and consistency engine"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # API Settings
    api_v1_prefix: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Processing Settings
    max_concurrent_documents: int = Field(
        default=4,
        ge=1,
        description="Upper bound on document versions processed at the same time",
    )
    blocking_rules: List[str] = Field(
        default_factory=lambda: ["DocumentIdentifierRequired"],
        description="Rules whose error-level violations reject a document",
    )
    validation_reference_date: Optional[date] = Field(
        default=None,
        description="Date treated as 'today' by date-relative rules; current date when unset",
    )

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def reference_date(self) -> date:
        """Resolve the date used by date-relative validation rules."""
        return self.validation_reference_date or date.today()
