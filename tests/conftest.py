"""
Pytest configuration and fixtures for catalog-sync tests.
"""

import json
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest
import structlog

from catalog_sync.config import Settings
from catalog_sync.localization import MappingNode, document_from_data
from catalog_sync.translation import TranslationProvider, Translator


class FakeProvider(TranslationProvider):
    """Scripted translation provider.

    Each call consumes the next scripted outcome, then falls back to
    ``default``. An outcome may be a string, an exception to raise, or a
    callable receiving the text.
    """

    name = "fake"

    def __init__(self, responses: Optional[List[Any]] = None, default: Any = "X"):
        self.responses = list(responses or [])
        self.default = default
        self.calls: List[tuple] = []

    async def translate(self, text, source_language, target_language, credential):
        self.calls.append((text, source_language, target_language, credential))
        outcome = self.responses.pop(0) if self.responses else self.default

        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(text)
        return outcome

    @property
    def texts(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture(scope="session", autouse=True)
def configure_structlog():
    """Route structlog through stdlib logging so stdout stays clean."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def clean_env(monkeypatch, tmp_path: Path):
    """Isolate settings from the developer's environment and .env file."""
    for name in ("API_KEY", "SOURCE_LANGUAGE", "TARGET_LANGUAGE", "MAX_ATTEMPTS",
                 "DOCUMENTS_DIR", "REPORTS_DIR", "DOCUMENT_FORMAT", "FALLBACK_PREFIX",
                 "SOURCE_DOCUMENT", "TARGET_DOCUMENT", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def test_config(tmp_path: Path) -> Settings:
    """Create test configuration."""
    return Settings(
        _env_file=None,
        api_key="test-key",
        source_language="en",
        target_language="he",
        max_attempts=3,
        retry_backoff=0.0,
        attempt_timeout=5.0,
        documents_dir=tmp_path / "files",
        reports_dir=tmp_path / "reports",
    )


@pytest.fixture
def provider_factory():
    """The FakeProvider class, for scripting outcomes per test."""
    return FakeProvider


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider that always answers "X"."""
    return FakeProvider()


@pytest.fixture
def failing_provider() -> FakeProvider:
    """Provider whose every call raises."""
    return FakeProvider(default=ConnectionError("provider unreachable"))


@pytest.fixture
def make_translator() -> Callable[..., Translator]:
    """Helper to build translators around a provider."""
    def _make(provider: TranslationProvider, **kwargs) -> Translator:
        kwargs.setdefault("credential", "test-key")
        return Translator(provider, **kwargs)
    return _make


@pytest.fixture
def doc() -> Callable[[dict], MappingNode]:
    """Helper to build documents from plain dicts."""
    return document_from_data


@pytest.fixture
def write_documents(tmp_path: Path):
    """Helper to create JSON documents in the test documents dir."""
    def _write(**documents: dict) -> Path:
        docs_dir = tmp_path / "files"
        docs_dir.mkdir(parents=True, exist_ok=True)
        for name, data in documents.items():
            (docs_dir / f"{name}.json").write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        return docs_dir
    return _write
