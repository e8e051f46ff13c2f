"""Single-string translation with bounded retry."""

import asyncio
from typing import Optional, TYPE_CHECKING

import structlog

from catalog_sync.errors import (
    ConfigurationError,
    RetryExhaustedError,
    RetryPolicy,
    TranslationExhaustedError,
    TranslationProviderError,
)

from .provider import GoogleTranslateProvider, TranslationProvider

if TYPE_CHECKING:
    from catalog_sync.config.settings import Settings

logger = structlog.get_logger(__name__)


class Translator:
    """Gets a translation for one string, masking transient provider failures.

    Each call is independent: up to ``max_attempts`` sequential provider calls,
    returning the first usable result. Missing text or credential fails before
    any network call.
    """

    def __init__(
        self,
        provider: TranslationProvider,
        credential: Optional[str],
        source_language: str = "en",
        target_language: str = "he",
        max_attempts: int = 3,
        retry_policy: Optional[RetryPolicy] = None,
        attempt_timeout: Optional[float] = None,
    ):
        self.provider = provider
        self.credential = credential
        self.source_language = source_language
        self.target_language = target_language
        self.retry_policy = retry_policy or RetryPolicy(max_attempts=max_attempts)
        self.attempt_timeout = attempt_timeout

    @property
    def max_attempts(self) -> int:
        return self.retry_policy.max_attempts

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        provider: Optional[TranslationProvider] = None,
    ) -> "Translator":
        """Create a translator with the configured credential and retry policy."""
        return cls(
            provider=provider or GoogleTranslateProvider(url=settings.translate_url),
            credential=settings.require_api_key(),
            source_language=settings.source_language,
            target_language=settings.target_language,
            retry_policy=RetryPolicy(
                max_attempts=settings.max_attempts,
                backoff=settings.retry_backoff,
            ),
            attempt_timeout=settings.attempt_timeout,
        )

    async def translate(
        self,
        text: str,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> str:
        """Translate ``text``.

        Args:
            text: String to translate
            source_language: Overrides the translator's source language
            target_language: Overrides the translator's target language
            max_attempts: Overrides the retry policy's attempt limit

        Returns:
            The translated string

        Raises:
            ConfigurationError: If ``text`` or the credential is missing
            TranslationExhaustedError: If every attempt failed
        """
        if not text:
            raise ConfigurationError("Text to translate is required", config_key="text")
        if not self.credential:
            raise ConfigurationError("Translation credential is required", config_key="api_key")

        source = source_language or self.source_language
        target = target_language or self.target_language
        policy = self.retry_policy
        if max_attempts is not None:
            policy = policy.with_attempts(max_attempts)

        try:
            translated = await policy.run(
                self._attempt,
                text,
                source,
                target,
                operation="translate",
            )
        except RetryExhaustedError as e:
            raise TranslationExhaustedError(
                text,
                e.attempts,
                previous_error=e.last_error,
            ) from e.last_error

        logger.info(
            "Translated string",
            text=text,
            translation=translated,
            source_language=source,
            target_language=target,
        )
        return translated

    async def _attempt(self, text: str, source: str, target: str) -> str:
        logger.debug("Translation attempt", text=text, source_language=source, target_language=target)

        call = self.provider.translate(text, source, target, self.credential)
        try:
            if self.attempt_timeout:
                result = await asyncio.wait_for(call, timeout=self.attempt_timeout)
            else:
                result = await call
        except TranslationProviderError:
            raise
        except asyncio.TimeoutError as e:
            raise TranslationProviderError(
                f"Translation attempt timed out after {self.attempt_timeout}s",
                provider=self.provider.name,
                previous_error=e,
            ) from e
        except Exception as e:
            raise TranslationProviderError(
                f"Translation provider raised {type(e).__name__}: {e}",
                provider=self.provider.name,
                previous_error=e,
            ) from e

        if not isinstance(result, str) or not result:
            raise TranslationProviderError(
                "Translation provider returned no usable text",
                provider=self.provider.name,
            )
        return result
