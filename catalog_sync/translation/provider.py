"""Translation provider clients.

A provider performs exactly one round-trip per call. Retrying is the
translator's job, so every failure here is raised as a
``TranslationProviderError``.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import requests
import structlog

from catalog_sync.config.settings import GOOGLE_TRANSLATE_URL
from catalog_sync.errors import TranslationProviderError

logger = structlog.get_logger(__name__)


class TranslationProvider(ABC):
    """External capability that translates one string."""

    name = "provider"

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        credential: str,
    ) -> str:
        """Return the translation of ``text``."""
        pass


class GoogleTranslateProvider(TranslationProvider):
    """Google Cloud Translation v2 over HTTP."""

    name = "google"

    def __init__(self, url: str = GOOGLE_TRANSLATE_URL, timeout: float = 20.0):
        self.url = url
        self.timeout = timeout

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        credential: str,
    ) -> str:
        params = {
            "key": credential,
            "q": text,
            "source": source_language,
            "target": target_language,
            "format": "text",
        }
        logger.debug("Calling translation provider", provider=self.name, url=self.url, text=text)
        payload = await asyncio.to_thread(self._post, params)
        return self._extract_translation(payload)

    def _post(self, params: dict) -> Any:
        try:
            resp = requests.post(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TranslationProviderError(
                f"Request to translation provider failed: {e}",
                provider=self.name,
                previous_error=e,
            ) from e

        if resp.status_code in (401, 403):
            raise TranslationProviderError(
                f"Translation provider rejected the credential ({resp.status_code})",
                provider=self.name,
                status_code=resp.status_code,
            )
        if resp.status_code != 200:
            raise TranslationProviderError(
                f"Translation provider returned HTTP {resp.status_code}: {resp.text[:200]}",
                provider=self.name,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise TranslationProviderError(
                "Translation provider returned invalid JSON",
                provider=self.name,
                status_code=resp.status_code,
                previous_error=e,
            ) from e

    def _extract_translation(self, payload: Any) -> str:
        try:
            translated = payload["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationProviderError(
                "Malformed response from translation provider",
                provider=self.name,
                previous_error=e,
            ) from e

        if not isinstance(translated, str):
            raise TranslationProviderError(
                f"Unexpected translatedText type: {type(translated).__name__}",
                provider=self.name,
            )
        return translated
