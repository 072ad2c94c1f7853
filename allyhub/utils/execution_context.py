"""Designated execution contexts for state mutation and notification delivery.

Every state machine and every observable channel is bound to one context. A
context accepts two kinds of work:

- ``post``: run a callback as soon as the context gets to it (FIFO)
- ``call_later``: run a callback after a delay, returning a cancellable handle

Cancellation is synchronous for every backend: once ``ScheduledCall.cancel()``
returns, the callback is guaranteed not to run.
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable


class ScheduledCall:
    """Handle for a delayed callback.

    ``cancel()`` revokes the backend timer through the function given to
    ``attach`` and also sets a flag that ``run()`` checks, so a cancelled call
    never fires even if the backend had already queued it.
    """

    def __init__(self, callback: Callable[..., Any], args: tuple = ()):
        self._callback = callback
        self._args = args
        self._cancelled = False
        self._fired = False
        self._revoke: Callable[[], Any] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def attach(self, revoke: Callable[[], Any]) -> None:
        """Remember how to revoke the backend timer, e.g. ``TimerHandle.cancel``."""
        self._revoke = revoke

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._revoke is not None:
            self._revoke()
            self._revoke = None

    def run(self) -> None:
        """Invoke the callback unless cancelled or already fired."""
        if self._cancelled or self._fired:
            return
        self._fired = True
        self._revoke = None
        self._callback(*self._args)


class ExecutionContext(ABC):
    """Single scheduler that owns all core mutation and delivery."""

    @abstractmethod
    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Queue a callback to run on this context."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        """Schedule a callback after ``delay`` seconds.

        Returns:
            A handle whose ``cancel()`` revokes the call synchronously
        """


class ManualExecutionContext(ExecutionContext):
    """Deterministic context driven by the caller.

    Posted callbacks wait in a queue until ``run_pending()``; delayed calls
    fire when ``advance()`` moves the virtual clock past their deadline. Used
    by the test suite and by hosts that pump their own loop.
    """

    def __init__(self) -> None:
        self._queue: deque[tuple[Callable[..., Any], tuple]] = deque()
        self._timers: list[tuple[float, int, ScheduledCall]] = []
        self._sequence = itertools.count()
        self.now = 0.0

    @property
    def pending_count(self) -> int:
        """Number of posted callbacks not yet run."""
        return len(self._queue)

    @property
    def scheduled_count(self) -> int:
        """Number of delayed calls still armed."""
        return sum(1 for _, _, call in self._timers if not call.cancelled and not call.fired)

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.append((callback, args))

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        call = ScheduledCall(callback, args)
        heapq.heappush(self._timers, (self.now + max(0.0, delay), next(self._sequence), call))
        return call

    def run_pending(self) -> int:
        """Run queued callbacks, including ones queued while running.

        Returns:
            Number of callbacks executed
        """
        count = 0
        while self._queue:
            callback, args = self._queue.popleft()
            callback(*args)
            count += 1
        return count

    def advance(self, seconds: float) -> None:
        """Move the virtual clock forward, firing due calls in deadline order.

        Posted work is drained after every fired call, the way a real event
        loop interleaves timers and queued callbacks.
        """
        target = self.now + seconds
        self.run_pending()
        while self._timers and self._timers[0][0] <= target:
            deadline, _, call = heapq.heappop(self._timers)
            self.now = deadline
            call.run()
            self.run_pending()
        self.now = target


class AsyncioExecutionContext(ExecutionContext):
    """Context backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.loop = loop or asyncio.get_running_loop()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        self.loop.call_soon(callback, *args)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        call = ScheduledCall(callback, args)
        call.attach(self.loop.call_later(delay, call.run).cancel)
        return call
