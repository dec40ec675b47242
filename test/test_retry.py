#!/usr/bin/env python3
"""Unit tests for the stubborn retry primitive."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest

from gravity_orchestrator.retry import (
    DEFAULT_POLICY,
    RETRY_TIME,
    RetryCancelled,
    RetryPolicy,
    retry_forever,
)


def failing_then(value, failures: int, error: Exception | None = None) -> AsyncMock:
    """Build an async operation that fails ``failures`` times, then returns ``value``."""
    error = error or ConnectionError("node down")
    return AsyncMock(side_effect=[error] * failures + [value])


def error_records(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.levelno == logging.ERROR]


@pytest.fixture
def mock_sleep():
    """Replace the retry delay with an instant, recorded suspension."""
    with patch("gravity_orchestrator.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


class TestRetryPolicy:
    """Test suite for RetryPolicy."""

    def test_default_delay(self):
        """The process-wide delay is five seconds."""
        assert RETRY_TIME == 5
        assert DEFAULT_POLICY.delay == RETRY_TIME
        assert RetryPolicy().delay == RETRY_TIME

    def test_negative_delay_rejected(self):
        """A negative delay is a configuration error."""
        with pytest.raises(ValueError, match="Retry delay must be non-negative"):
            RetryPolicy(delay=-1)

    @pytest.mark.asyncio
    async def test_first_attempt_success(self, mock_sleep, caplog):
        """Success on the first attempt costs no log lines and no delay."""
        operation = AsyncMock(return_value=7)

        result = await DEFAULT_POLICY.run(operation, "should not be logged")

        assert result == 7
        operation.assert_awaited_once()
        mock_sleep.assert_not_awaited()
        assert caplog.records == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("k", [2, 3, 10])
    async def test_kth_attempt_success(self, mock_sleep, caplog, k):
        """k-1 failures produce k-1 identical logs and k-1 fixed delays."""
        operation = failing_then("ok", failures=k - 1)

        with caplog.at_level(logging.ERROR):
            result = await DEFAULT_POLICY.run(operation, "query failed")

        assert result == "ok"
        assert operation.await_count == k
        assert mock_sleep.await_count == k - 1
        assert all(call.args == (RETRY_TIME,) for call in mock_sleep.await_args_list)

        records = error_records(caplog)
        assert len(records) == k - 1
        assert {r.getMessage() for r in records} == {"query failed"}

    @pytest.mark.asyncio
    async def test_failure_message_callable(self, mock_sleep, caplog):
        """A callable message receives the caught exception."""
        operation = failing_then(1, failures=1, error=RuntimeError("boom"))

        with caplog.at_level(logging.ERROR):
            await DEFAULT_POLICY.run(operation, lambda e: f"failed: {e}")

        assert [r.getMessage() for r in error_records(caplog)] == ["failed: boom"]

    @pytest.mark.asyncio
    async def test_returns_latest_successful_value(self, mock_sleep):
        """The value is whatever the successful call returned, not cached."""
        operation = AsyncMock(side_effect=[10, 20])

        assert await DEFAULT_POLICY.run(operation, "x") == 10
        assert await DEFAULT_POLICY.run(operation, "x") == 20

    @pytest.mark.asyncio
    async def test_always_failing_never_returns(self, caplog):
        """A permanently failing operation keeps retrying and never returns."""
        operation = AsyncMock(side_effect=ConnectionError("down"))
        policy = RetryPolicy(delay=0)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(policy.run(operation, "still down"), timeout=0.2)

        assert operation.await_count > 10
        assert len(error_records(caplog)) >= 10

    @pytest.mark.asyncio
    async def test_base_exceptions_propagate(self, mock_sleep):
        """Task cancellation is not treated as a query failure."""
        operation = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await DEFAULT_POLICY.run(operation, "x")

        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_runs_do_not_block_each_other(self):
        """Two retry loops on one event loop finish as if run alone."""
        policy = RetryPolicy(delay=0.05)
        slow = failing_then("slow", failures=4)
        fast = AsyncMock(return_value="fast")

        loop = asyncio.get_running_loop()
        finished: dict[str, float] = {}

        async def timed(name, operation):
            start = loop.time()
            result = await policy.run(operation, f"{name} failed")
            finished[name] = loop.time() - start
            return result

        results = await asyncio.gather(timed("slow", slow), timed("fast", fast))

        assert results == ["slow", "fast"]
        assert finished["fast"] < policy.delay
        assert finished["slow"] >= 4 * policy.delay * 0.9


class TestRetryCancellation:
    """Test suite for the optional stop event."""

    @pytest.mark.asyncio
    async def test_stop_event_ends_retry(self, caplog):
        """Setting the stop event during the delay raises RetryCancelled."""
        policy = RetryPolicy(delay=10)
        operation = AsyncMock(side_effect=ConnectionError("down"))
        stop_event = asyncio.Event()

        task = asyncio.create_task(policy.run(operation, "down", stop_event))
        await asyncio.sleep(0.01)
        stop_event.set()

        with pytest.raises(RetryCancelled):
            await asyncio.wait_for(task, timeout=1)

        operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_event_already_set(self):
        """A stop event set before the first retry stops after one attempt."""
        operation = AsyncMock(side_effect=ConnectionError("down"))
        stop_event = asyncio.Event()
        stop_event.set()

        with pytest.raises(RetryCancelled):
            await RetryPolicy(delay=10).run(operation, "down", stop_event)

        operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_event_ignored_on_success(self):
        """A successful query returns even when the stop event is set."""
        stop_event = asyncio.Event()
        stop_event.set()

        result = await DEFAULT_POLICY.run(AsyncMock(return_value=3), "x", stop_event)

        assert result == 3

    @pytest.mark.asyncio
    async def test_unset_stop_event_keeps_retrying(self):
        """Without a stop request the loop behaves like plain stubborn retry."""
        operation = failing_then(5, failures=3)
        stop_event = asyncio.Event()

        result = await RetryPolicy(delay=0.01).run(operation, "down", stop_event)

        assert result == 5
        assert operation.await_count == 4


class TestRetryForever:
    """Test suite for the module level helper."""

    @pytest.mark.asyncio
    async def test_uses_default_policy(self, mock_sleep):
        """retry_forever waits RETRY_TIME between attempts."""
        operation = failing_then(99, failures=2)

        assert await retry_forever(operation, "failed") == 99
        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(RETRY_TIME)
