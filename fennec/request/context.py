"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fennec, a product of Garudex Labs

Request cancellation context.

A :class:`RequestContext` carries a caller's cancellation signal and optional
deadline into a request. Contexts form a tree: a child is done as soon as any
ancestor is cancelled or expires, and its effective deadline is the earliest
one in its lineage.

``cancel()`` may be called from any thread. Waiters are woken on their own
event loop through ``call_soon_threadsafe``.

Example::

    ctx = RequestContext.with_timeout(2.0)
    response = await client.search(index="logs", context=ctx)
"""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Iterator, List, Optional, Tuple

from fennec.exceptions import ContextCancelledError, ContextError, DeadlineExceededError


def _resolve(future: asyncio.Future) -> None:
    if not future.done():
        future.set_result(None)


class RequestContext:
    """Cancellation signal and deadline for one or more requests.

    Args:
        deadline: Absolute deadline on the ``time.monotonic()`` clock.
        parent: Optional parent context whose cancellation propagates here.
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        parent: Optional[RequestContext] = None,
    ) -> None:
        self._deadline = deadline
        self._parent = parent
        self._cancelled = False
        self._lock = threading.Lock()
        self._waiters: List[Tuple[asyncio.AbstractEventLoop, asyncio.Future]] = []

    @classmethod
    def with_timeout(
        cls, seconds: float, parent: Optional[RequestContext] = None
    ) -> RequestContext:
        """Create a context that expires ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, parent=parent)

    @classmethod
    def with_deadline(
        cls, deadline: float, parent: Optional[RequestContext] = None
    ) -> RequestContext:
        """Create a context that expires at a ``time.monotonic()`` instant."""
        return cls(deadline=deadline, parent=parent)

    def child(self, timeout: Optional[float] = None) -> RequestContext:
        """Derive a context cancelled together with this one."""
        deadline = None if timeout is None else time.monotonic() + timeout
        return RequestContext(deadline=deadline, parent=self)

    # -- State -------------------------------------------------------------

    def _lineage(self) -> Iterator[RequestContext]:
        ctx: Optional[RequestContext] = self
        while ctx is not None:
            yield ctx
            ctx = ctx._parent

    @property
    def deadline(self) -> Optional[float]:
        """Earliest deadline in the lineage, or None."""
        deadlines = [c._deadline for c in self._lineage() if c._deadline is not None]
        return min(deadlines) if deadlines else None

    @property
    def cancelled(self) -> bool:
        """True if this context or an ancestor was explicitly cancelled."""
        return any(c._cancelled for c in self._lineage())

    @property
    def expired(self) -> bool:
        deadline = self.deadline
        return deadline is not None and time.monotonic() >= deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline (never negative), or None without one."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    def error(self) -> Optional[ContextError]:
        """The error describing why this context is done, or None."""
        if self.cancelled:
            return ContextCancelledError("request context cancelled")
        if self.expired:
            return DeadlineExceededError("request context deadline exceeded")
        return None

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    # -- Signalling --------------------------------------------------------

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            waiters = list(self._waiters)
            self._waiters.clear()
        for loop, future in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(_resolve, future)

    def _add_waiter(self, loop: asyncio.AbstractEventLoop, future: asyncio.Future) -> None:
        with self._lock:
            if not self._cancelled:
                self._waiters.append((loop, future))
                return
        loop.call_soon(_resolve, future)

    def _remove_waiter(self, future: asyncio.Future) -> None:
        with self._lock:
            self._waiters = [(l, f) for l, f in self._waiters if f is not future]

    async def wait(self) -> ContextError:
        """Wait until the context is cancelled or its deadline passes.

        Returns:
            The error describing why the context finished.
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        lineage = list(self._lineage())
        for ctx in lineage:
            ctx._add_waiter(loop, future)
        try:
            timeout = self.remaining()
            if timeout is None:
                await future
            else:
                try:
                    await asyncio.wait_for(asyncio.shield(future), timeout)
                except asyncio.TimeoutError:
                    pass
        finally:
            for ctx in lineage:
                ctx._remove_waiter(future)
        return self.error() or DeadlineExceededError("request context deadline exceeded")

    def __repr__(self) -> str:
        return (
            f"RequestContext(cancelled={self.cancelled}, "
            f"remaining={self.remaining()!r})"
        )
