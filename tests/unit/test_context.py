"""Unit tests for RequestContext."""

import asyncio

import pytest

from faas_gateway_client.context import REASON_CANCELLED, REASON_DEADLINE, RequestContext
from faas_gateway_client.exceptions import ContextDoneError


class TestRequestContextState:
    """Test the context flags and remaining time."""

    def test_background_is_never_done(self):
        context = RequestContext.background()
        assert context.deadline is None
        assert context.remaining() is None
        assert context.done is False
        context.raise_if_done()

    def test_cancel(self):
        context = RequestContext()
        context.cancel()
        context.cancel()
        assert context.cancelled is True
        assert context.done is True
        with pytest.raises(ContextDoneError) as exc_info:
            context.raise_if_done()
        assert exc_info.value.reason == REASON_CANCELLED

    def test_expired_deadline(self):
        context = RequestContext(timeout=0)
        assert context.expired is True
        assert context.remaining() == 0.0
        with pytest.raises(ContextDoneError) as exc_info:
            context.raise_if_done()
        assert exc_info.value.reason == REASON_DEADLINE

    def test_remaining_decreases_and_is_bounded(self):
        context = RequestContext(timeout=30)
        remaining = context.remaining()
        assert remaining is not None
        assert 0 < remaining <= 30
        assert context.expired is False

    def test_cancel_wins_over_deadline(self):
        context = RequestContext(timeout=0)
        context.cancel()
        with pytest.raises(ContextDoneError) as exc_info:
            context.raise_if_done()
        assert exc_info.value.reason == REASON_CANCELLED


class TestRequestContextRun:
    """Test awaiting work under a context."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def work():
            return 42

        assert await RequestContext(timeout=5).run(work()) == 42

    @pytest.mark.asyncio
    async def test_propagates_exceptions(self):
        async def work():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await RequestContext().run(work())

    @pytest.mark.asyncio
    async def test_already_done_does_not_run_work(self):
        started = False

        async def work():
            nonlocal started
            started = True

        context = RequestContext()
        context.cancel()
        with pytest.raises(ContextDoneError):
            await context.run(work())
        assert started is False

    @pytest.mark.asyncio
    async def test_deadline_interrupts_work(self):
        cleaned_up = asyncio.Event()

        async def work():
            try:
                await asyncio.sleep(10)
            finally:
                cleaned_up.set()

        with pytest.raises(ContextDoneError) as exc_info:
            await RequestContext(timeout=0.05).run(work())
        assert exc_info.value.reason == REASON_DEADLINE
        assert cleaned_up.is_set()

    @pytest.mark.asyncio
    async def test_cancel_interrupts_work(self):
        context = RequestContext()
        cleaned_up = asyncio.Event()

        async def work():
            try:
                await asyncio.sleep(10)
            finally:
                cleaned_up.set()

        async def cancel_soon():
            await asyncio.sleep(0.01)
            context.cancel()

        canceller = asyncio.create_task(cancel_soon())
        with pytest.raises(ContextDoneError) as exc_info:
            await context.run(work())
        await canceller
        assert exc_info.value.reason == REASON_CANCELLED
        assert cleaned_up.is_set()
