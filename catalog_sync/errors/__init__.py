"""
Error handling for catalog-sync:
- Structured error hierarchy
- Retry policy for flaky external calls
"""

from .exceptions import (
    CatalogSyncError,
    TemporaryError,
    PermanentError,
    ConfigurationError,
    RetryExhaustedError,
    TranslationProviderError,
    TranslationExhaustedError,
    StorageError,
    DocumentLoadError,
    DocumentSaveError,
    ReportWriteError,
)

from .handlers import RetryPolicy

__all__ = [
    # Exceptions
    "CatalogSyncError",
    "TemporaryError",
    "PermanentError",
    "ConfigurationError",
    "RetryExhaustedError",
    "TranslationProviderError",
    "TranslationExhaustedError",
    "StorageError",
    "DocumentLoadError",
    "DocumentSaveError",
    "ReportWriteError",

    # Handlers
    "RetryPolicy",
]
