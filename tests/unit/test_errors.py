"""
Unit tests for the error hierarchy and retry policy.
"""

import pytest
from pathlib import Path

from catalog_sync.errors import (
    CatalogSyncError,
    TemporaryError,
    PermanentError,
    ConfigurationError,
    RetryExhaustedError,
    TranslationProviderError,
    TranslationExhaustedError,
    DocumentLoadError,
    StorageError,
    RetryPolicy,
)


class TestErrorHierarchy:
    """Test error class hierarchy."""

    def test_base_error_creation(self):
        error = CatalogSyncError(
            message="Test error",
            error_code="TEST_ERROR",
            context={"key": "value"},
        )

        assert error.message == "Test error"
        assert error.error_code == "TEST_ERROR"
        assert error.context == {"key": "value"}
        assert error.timestamp is not None

    def test_default_error_code_is_class_name(self):
        assert ConfigurationError("bad").error_code == "ConfigurationError"

    def test_error_to_dict(self):
        cause = ValueError("root cause")
        error = CatalogSyncError("Test error", context={"key": "value"}, previous_error=cause)

        error_dict = error.to_dict()

        assert error_dict["error_type"] == "CatalogSyncError"
        assert error_dict["message"] == "Test error"
        assert error_dict["context"]["key"] == "value"
        assert error_dict["previous_error"] == "root cause"
        assert "timestamp" in error_dict

    def test_temporary_and_permanent(self):
        assert TemporaryError("flaky").is_retryable()
        assert not PermanentError("broken").is_retryable()

    def test_provider_error_is_retryable(self):
        error = TranslationProviderError("HTTP 503", provider="google", status_code=503)

        assert error.is_retryable()
        assert error.status_code == 503
        assert error.context == {"provider": "google", "status_code": 503}

    def test_exhausted_error_names_text_and_attempts(self):
        error = TranslationExhaustedError("Hello", 3)

        assert not error.is_retryable()
        assert "Hello" in str(error)
        assert "3 attempts" in str(error)
        assert error.context == {"text": "Hello", "attempts": 3}

    def test_configuration_error_key(self):
        error = ConfigurationError("API_KEY missing", config_key="api_key")

        assert error.config_key == "api_key"
        assert error.context["config_key"] == "api_key"

    def test_storage_error_context(self):
        error = DocumentLoadError("missing", name="he", path=Path("files/he.json"))

        assert isinstance(error, StorageError)
        assert error.context == {"name": "he", "path": "files/he.json"}


class TestRetryPolicy:
    """Test RetryPolicy behaviour."""

    async def test_success_first_attempt(self):
        calls = 0

        async def operation():
            nonlocal calls
            calls += 1
            return "ok"

        result = await RetryPolicy(max_attempts=3).run(operation)

        assert result == "ok"
        assert calls == 1

    async def test_retries_temporary_errors(self):
        calls = 0

        async def operation(value):
            nonlocal calls
            calls += 1
            if calls < 3:
                raise TemporaryError("flaky")
            return value

        result = await RetryPolicy(max_attempts=3).run(operation, "done")

        assert result == "done"
        assert calls == 3

    async def test_exhaustion(self):
        calls = 0

        async def operation():
            nonlocal calls
            calls += 1
            raise TemporaryError(f"failure {calls}")

        with pytest.raises(RetryExhaustedError) as exc_info:
            await RetryPolicy(max_attempts=2).run(operation, operation="flaky_op")

        assert calls == 2
        assert exc_info.value.attempts == 2
        assert exc_info.value.operation == "flaky_op"
        assert str(exc_info.value.last_error) == "failure 2"
        assert exc_info.value.__cause__ is exc_info.value.last_error

    async def test_non_retryable_error_propagates_immediately(self):
        calls = 0

        async def operation():
            nonlocal calls
            calls += 1
            raise PermanentError("broken")

        with pytest.raises(PermanentError):
            await RetryPolicy(max_attempts=3).run(operation)

        assert calls == 1

    async def test_custom_retry_predicate(self):
        calls = 0

        async def operation():
            nonlocal calls
            calls += 1
            raise KeyError("missing")

        with pytest.raises(RetryExhaustedError):
            await RetryPolicy(max_attempts=4, retry_on=(KeyError,)).run(operation)

        assert calls == 4

    async def test_failure_callback_sees_every_failed_attempt(self):
        seen = []

        async def operation():
            raise TemporaryError("down")

        policy = RetryPolicy(max_attempts=3, on_failure=lambda n, e: seen.append((n, str(e))))

        with pytest.raises(RetryExhaustedError):
            await policy.run(operation)

        assert seen == [(1, "down"), (2, "down"), (3, "down")]

    def test_with_attempts_keeps_other_settings(self):
        policy = RetryPolicy(max_attempts=3, backoff=0.5, retry_on=(KeyError,))

        copy = policy.with_attempts(5)

        assert copy.max_attempts == 5
        assert copy.backoff == 0.5
        assert copy.retry_on == (KeyError,)
        assert policy.max_attempts == 3

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)
