"""
Retry handling for catalog-sync.

``RetryPolicy`` wraps tenacity so any coroutine can be retried with a bounded
number of attempts, an optional exponential backoff and a predicate on the
exception type.
"""

from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

from .exceptions import RetryExhaustedError, TemporaryError

logger = structlog.get_logger(__name__)

T = TypeVar('T')

FailureCallback = Callable[[int, BaseException], None]


class RetryPolicy:
    """
    Sequential retry with a bounded number of attempts.

    Exceptions matching ``retry_on`` are retried until ``max_attempts`` is
    reached, then ``RetryExhaustedError`` is raised with the last error
    chained. Anything else propagates on the first occurrence.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: float = 0.0,
        max_backoff: float = 30.0,
        retry_on: Tuple[Type[BaseException], ...] = (TemporaryError,),
        on_failure: Optional[FailureCallback] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.max_attempts = max_attempts
        self.backoff = backoff
        self.max_backoff = max_backoff
        self.retry_on = retry_on
        self.on_failure = on_failure

    def with_attempts(self, max_attempts: int) -> "RetryPolicy":
        """Return a copy of this policy with a different attempt limit."""
        return RetryPolicy(
            max_attempts=max_attempts,
            backoff=self.backoff,
            max_backoff=self.max_backoff,
            retry_on=self.retry_on,
            on_failure=self.on_failure,
        )

    def _wait(self):
        if self.backoff <= 0:
            return wait_none()
        return wait_exponential(multiplier=self.backoff, max=self.max_backoff)

    def _after_attempt(self, operation: str) -> Callable[[RetryCallState], None]:
        def after(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception()
            logger.warning(
                "Attempt failed",
                operation=operation,
                attempt=retry_state.attempt_number,
                max_attempts=self.max_attempts,
                error=str(error),
                error_type=type(error).__name__,
            )
            if self.on_failure:
                self.on_failure(retry_state.attempt_number, error)

        return after

    async def run(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        operation: Optional[str] = None,
        **kwargs: Any
    ) -> T:
        """Await ``func(*args, **kwargs)`` under this policy."""
        op_name = operation or getattr(func, "__name__", "operation")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait(),
            retry=retry_if_exception_type(self.retry_on),
            after=self._after_attempt(op_name),
            reraise=False,
        )

        try:
            return await retrying(func, *args, **kwargs)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logger.error(
                "Max retry attempts reached",
                operation=op_name,
                attempts=self.max_attempts,
                error=str(last_error),
            )
            raise RetryExhaustedError(op_name, self.max_attempts, last_error) from last_error
