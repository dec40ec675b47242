#!/usr/bin/env python3
"""Stubborn retry primitive.

Retries an async query forever at a fixed interval until it succeeds.
There is no attempt limit and no backoff; every failure is logged the
same way. Callers that need bounded retries must not use this module.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

# Get logger for this module
logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_TIME = 5  # seconds

FailureMessage = str | Callable[[Exception], str]


class RetryCancelled(Exception):
    """Raised when a stop event ends a stubborn retry before success."""


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Retry forever with a fixed delay, logging every failed attempt.

    Attributes:
        delay: Seconds to wait between a failed attempt and the next one
    """

    delay: float = RETRY_TIME

    def __post_init__(self) -> None:
        """Validate retry policy."""
        if self.delay < 0:
            raise ValueError(f"Retry delay must be non-negative, got {self.delay}")

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        failure_message: FailureMessage,
        stop_event: asyncio.Event | None = None,
    ) -> T:
        """Await ``operation`` until it returns a value.

        Args:
            operation: Zero-argument callable producing a fresh awaitable
                for every attempt
            failure_message: Message logged on each failure, or a callable
                building it from the caught exception
            stop_event: Optional event checked before each retry; once set
                the loop gives up with RetryCancelled

        Returns:
            The value of the first successful attempt

        Raises:
            RetryCancelled: Only when ``stop_event`` is set. Without a stop
                event this method returns the value or never returns.
        """
        while True:
            try:
                return await operation()
            except Exception as e:
                message = failure_message(e) if callable(failure_message) else failure_message
                logger.error(message)

            await self._wait(stop_event)

    async def _wait(self, stop_event: asyncio.Event | None) -> None:
        """Suspend for the retry delay, waking early if stopped."""
        if stop_event is None:
            await asyncio.sleep(self.delay)
            return

        if stop_event.is_set():
            raise RetryCancelled("Stop requested before retry")

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=self.delay)
        except asyncio.TimeoutError:
            return  # Delay elapsed, retry

        raise RetryCancelled("Stop requested while waiting to retry")


DEFAULT_POLICY = RetryPolicy()


async def retry_forever(
    operation: Callable[[], Awaitable[T]],
    failure_message: FailureMessage,
    stop_event: asyncio.Event | None = None,
) -> T:
    """Run ``operation`` under the process-wide default policy."""
    return await DEFAULT_POLICY.run(operation, failure_message, stop_event)
