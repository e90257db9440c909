from __future__ import annotations

import asyncio
import functools
import logging
import typing as tp
from dataclasses import dataclass

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from ..const import MAX_RETRIES

_LOGGER = logging.getLogger(__name__)

T = tp.TypeVar("T")
Sleep = tp.Callable[[float], tp.Awaitable[tp.Any]]


def exponential_backoff(attempt_index: int) -> float:
    """Seconds to wait before retry number ``attempt_index + 1``: 1, 2, 4, ..."""
    return float(2**attempt_index)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = MAX_RETRIES
    backoff: tp.Callable[[int], float] = exponential_backoff

    def __post_init__(self) -> None:
        if (
            isinstance(self.max_attempts, bool)
            or not isinstance(self.max_attempts, int)
            or self.max_attempts < 1
        ):
            raise ValueError(f"max_attempts must be a positive integer, got {self.max_attempts!r}")

    def wait(self, retry_state: RetryCallState) -> float:
        return self.backoff(retry_state.attempt_number - 1)


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
    _LOGGER.warning(
        f"Attempt {retry_state.attempt_number} failed: {retry_state.outcome.exception()}. "
        f"Retrying in {wait_time}s..."
    )


async def run_with_retry(
    operation: tp.Callable[[], tp.Awaitable[T]],
    max_attempts: int | None = None,
    *,
    policy: RetryPolicy | None = None,
    sleep: Sleep | None = None,
) -> T:
    """Run an async operation, retrying failures with exponential backoff.

    The last attempt's exception is raised unchanged once ``max_attempts`` is
    reached, with no wait after it. Cancellation is never retried; cancelling
    the caller during a backoff wait cancels the pending retry.

    :param operation: Zero-argument callable returning an awaitable
    :param max_attempts: Total number of attempts, 3 by default. Must match
        ``policy.max_attempts`` when both are given
    :param policy: Attempts and backoff for this call
    :param sleep: Coroutine used for the backoff wait, ``asyncio.sleep`` by default

    :return: Result of the first successful attempt
    """

    if policy is None:
        policy = RetryPolicy(max_attempts=MAX_RETRIES if max_attempts is None else max_attempts)
    elif max_attempts is not None and max_attempts != policy.max_attempts:
        raise ValueError(
            f"max_attempts {max_attempts!r} conflicts with policy.max_attempts {policy.max_attempts}"
        )
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=policy.wait,
        retry=retry_if_exception_type(Exception),
        before_sleep=_log_failed_attempt,
        sleep=sleep or asyncio.sleep,
        reraise=True,
    ):
        with attempt:
            return await operation()


def retry_with_backoff(max_attempts: int = MAX_RETRIES, sleep: Sleep | None = None):
    def retry_with_backoff_decorator(func: tp.Callable[..., tp.Awaitable[T]]):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            return await run_with_retry(
                lambda: func(*args, **kwargs), max_attempts, sleep=sleep
            )

        return wrapper

    return retry_with_backoff_decorator
