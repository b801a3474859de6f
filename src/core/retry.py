"""Exponential backoff with jitter for flaky network calls."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from tenacity import AsyncRetrying, RetryCallState, stop_after_attempt
from tenacity.wait import wait_base

from src.core.logging import get_logger

logger = get_logger("retry")

T = TypeVar("T")


class wait_exponential_jitter_ratio(wait_base):
    """Wait ``base * 2**(n-1)`` plus up to ``jitter_ratio`` of that, n = failed attempt."""

    def __init__(self, base: float = 1.0, jitter_ratio: float = 0.5) -> None:
        self.base = base
        self.jitter_ratio = jitter_ratio

    def __call__(self, retry_state: RetryCallState) -> float:
        delay = self.base * 2 ** (retry_state.attempt_number - 1)
        return delay + random.uniform(0, delay * self.jitter_ratio)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"Attempt {retry_state.attempt_number} failed ({type(exc).__name__}: {exc}), "
        f"retrying in {delay:.2f}s"
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry that treats every exception as retryable.

    The last exception is re-raised unchanged once ``max_attempts`` is spent.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    jitter_ratio: float = 0.5
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        # operation may be a plain lambda returning a coroutine, so await it per attempt
        async for attempt in self._retrying():
            with attempt:
                return await operation()
        raise AssertionError("unreachable: tenacity re-raises after the last attempt")

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter_ratio(self.base_delay, self.jitter_ratio),
            sleep=self.sleep,
            before_sleep=_log_retry,
            reraise=True,
        )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    base_delay: float = 1.0,
    jitter_ratio: float = 0.5,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` with up to ``max_attempts`` tries."""
    policy = RetryPolicy(
        max_attempts=max_attempts,
        base_delay=base_delay,
        jitter_ratio=jitter_ratio,
        sleep=sleep,
    )
    return await policy.run(operation)
