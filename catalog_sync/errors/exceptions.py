"""
Error hierarchy for catalog-sync.

Errors are split into temporary ones, which retry logic may repeat, and
permanent ones, which surface to the caller straight away.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path


class CatalogSyncError(Exception):
    """
    Base exception for all catalog-sync errors.

    Carries an error code and a context dict so that structured logs can
    describe the failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[BaseException] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }

    def is_retryable(self) -> bool:
        """Determine if this error should trigger a retry."""
        return isinstance(self, TemporaryError)


class TemporaryError(CatalogSyncError):
    """Base class for temporary errors that should be retried."""
    pass


class PermanentError(CatalogSyncError):
    """Base class for permanent errors that should not be retried."""
    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration, including missing call arguments."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(message, context={"config_key": config_key}, **kwargs)
        self.config_key = config_key


class RetryExhaustedError(PermanentError):
    """Every attempt allowed by a retry policy failed."""

    def __init__(
        self,
        operation: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(
            f"{operation} failed after {attempts} attempts",
            context={"operation": operation, "attempts": attempts},
            previous_error=last_error,
        )
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class TranslationProviderError(TemporaryError):
    """A single call to the translation provider failed."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"provider": provider, "status_code": status_code},
            **kwargs
        )
        self.status_code = status_code


class TranslationExhaustedError(PermanentError):
    """All translation attempts for one string failed."""

    def __init__(self, text: str, attempts: int, **kwargs):
        super().__init__(
            f'Failed to translate "{text}" after {attempts} attempts',
            context={"text": text, "attempts": attempts},
            **kwargs
        )
        self.text = text
        self.attempts = attempts


class StorageError(PermanentError):
    """Document or report storage errors. Fatal to a sync run."""

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        path: Optional[Path] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"name": name, "path": str(path) if path else None},
            **kwargs
        )
        self.name = name
        self.path = path


class DocumentLoadError(StorageError):
    """A document is missing, unreadable or malformed."""
    pass


class DocumentSaveError(StorageError):
    """A document could not be written."""
    pass


class ReportWriteError(StorageError):
    """A report artifact could not be written."""
    pass
