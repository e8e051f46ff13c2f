"""Runtime settings for catalog-sync.

Values come from the environment or an env file. Nothing in the core reads
them globally: the settings object is passed to the factories that need it.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_sync.errors import ConfigurationError

GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class Settings(BaseSettings):
    """Configuration for a sync run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Translation provider
    api_key: Optional[SecretStr] = Field(None, description="Translation provider credential")
    translate_url: str = Field(GOOGLE_TRANSLATE_URL, description="Translation endpoint")
    source_language: str = Field("en", min_length=1)
    target_language: str = Field("he", min_length=1)

    # Retry behaviour
    max_attempts: int = Field(3, ge=1, description="Attempts per string")
    retry_backoff: float = Field(0.0, ge=0, description="Exponential backoff multiplier in seconds")
    attempt_timeout: Optional[float] = Field(30.0, gt=0, description="Seconds before an attempt is abandoned")
    fallback_prefix: Optional[str] = Field(None, description="Marker put in front of untranslated values")

    # Documents and reports
    documents_dir: Path = Field(Path("files"))
    source_document: str = Field("en", min_length=1)
    target_document: str = Field("he", min_length=1)
    document_format: Literal["json", "yaml"] = "json"
    reports_dir: Path = Field(Path("reports"))

    debug: bool = False

    def require_api_key(self) -> str:
        """Return the plain credential or fail if it is not configured."""
        if self.api_key is None or not self.api_key.get_secret_value():
            raise ConfigurationError(
                "API_KEY is required for the translation provider",
                config_key="api_key",
            )
        return self.api_key.get_secret_value()
