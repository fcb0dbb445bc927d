"""Cancellation and deadline token for gateway requests.

A RequestContext is handed to every attempt of a listing call. It carries an
optional deadline and a cancel signal; work awaited through
:meth:`RequestContext.run` is abandoned as soon as either fires.

Examples:
    Bounding a whole call to five seconds::

        context = RequestContext(timeout=5)
        functions = await fetch_list(issuer, context)

    Cancelling from another task::

        context = RequestContext()
        task = asyncio.create_task(fetch_list(issuer, context))
        context.cancel()
"""

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

from faas_gateway_client.exceptions import ContextDoneError

T = TypeVar("T")

REASON_CANCELLED = "cancelled"
REASON_DEADLINE = "deadline exceeded"


class RequestContext:
    """Cancellation and deadline token shared by the attempts of one call.

    Attributes:
        deadline: Monotonic clock value after which the context is expired,
            or None for no deadline.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the context.

        Args:
            timeout: Seconds from now until the deadline, or None for none.
        """
        self.deadline = None if timeout is None else time.monotonic() + timeout
        self._cancelled = asyncio.Event()

    @classmethod
    def background(cls) -> "RequestContext":
        """Return a context that is never done unless cancelled."""
        return cls()

    def cancel(self) -> None:
        """Cancel the context. Idempotent."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def remaining(self) -> float | None:
        """Seconds left until the deadline, never negative; None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def raise_if_done(self) -> None:
        """Raise ContextDoneError if the context is cancelled or expired."""
        if self.cancelled:
            raise ContextDoneError(REASON_CANCELLED)
        if self.expired:
            raise ContextDoneError(REASON_DEADLINE)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` under this context's deadline and cancel signal.

        If the context finishes first, the inner task is cancelled and awaited
        so that its cleanup (closing response streams) runs before
        ContextDoneError is raised.

        Args:
            awaitable: The work to run.

        Returns:
            The awaitable's result.

        Raises:
            ContextDoneError: If the context was cancelled or expired first.
        """
        task = asyncio.ensure_future(awaitable)
        try:
            self.raise_if_done()
        except ContextDoneError:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise

        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()
            await asyncio.gather(waiter, return_exceptions=True)

        if task.done():
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        if self.cancelled:
            raise ContextDoneError(REASON_CANCELLED)
        raise ContextDoneError(REASON_DEADLINE)
