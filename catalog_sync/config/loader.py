"""Configuration loading."""

from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from catalog_sync.errors import ConfigurationError

from .settings import Settings

logger = structlog.get_logger(__name__)


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """Build settings from the environment, an optional env file and overrides.

    Args:
        config_file: Env-style file to read instead of ``.env``
        **overrides: Explicit values, e.g. from the command line. ``None``
            values are ignored so unset CLI flags fall back to the environment.

    Raises:
        ConfigurationError: If the file is missing or a value is invalid
    """
    if config_file is not None and not config_file.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            config_key="config_file",
        )

    values = {key: value for key, value in overrides.items() if value is not None}

    try:
        if config_file is not None:
            settings = Settings(_env_file=config_file, **values)
        else:
            settings = Settings(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg', str(e))}",
            config_key=key,
            previous_error=e,
        ) from e

    logger.debug(
        "Configuration loaded",
        config_file=str(config_file) if config_file else None,
        source_language=settings.source_language,
        target_language=settings.target_language,
        documents_dir=str(settings.documents_dir),
        has_api_key=settings.api_key is not None,
    )
    return settings
