"""Change-notification channel for observable state fields.

Each observable field owns its subscriber list. Changing the field enqueues one
delivery per subscriber on the field's execution context, in registration
order; deliveries never run inside the mutating call. Channels only hold weak
references to their ``Subscription`` handles: the subscriber keeps the handle
alive, and dropping it unsubscribes just like ``dispose()`` does.
"""

import logging
import weakref
from typing import Any, Callable, Generic, TypeVar

from allyhub.utils.execution_context import ExecutionContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ``subscribe``; disposing or dropping it unsubscribes."""

    def __init__(self, channel: "_Channel", callback: Callable[[Any], Any]):
        self._channel = channel
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def dispose(self) -> None:
        """Unsubscribe. Deliveries already queued for this handle are dropped."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()


class SubscriptionBag:
    """A subscriber's set of handles, disposed together."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __enter__(self) -> "SubscriptionBag":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()


class _Channel:
    """Subscriber registry plus delivery through an execution context."""

    def __init__(self, context: ExecutionContext, name: str | None = None):
        self.context = context
        self.name = name or type(self).__name__
        self._subscribers: list[weakref.ref[Subscription]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._live_subscribers())

    def subscribe(self, callback: Callable[[Any], Any]) -> Subscription:
        """Register a callback.

        Args:
            callback: Called with the new value on the execution context

        Returns:
            Subscription handle the caller must keep; dropping it unsubscribes
        """
        subscription = Subscription(self, callback)
        self._subscribers.append(weakref.ref(subscription))
        return subscription

    def _live_subscribers(self) -> list[Subscription]:
        """Return active subscriptions in registration order, pruning dropped handles."""
        live = []
        for ref in self._subscribers:
            subscription = ref()
            if subscription is not None and subscription.active:
                live.append(subscription)
        if len(live) != len(self._subscribers):
            self._subscribers = [weakref.ref(subscription) for subscription in live]
        return live

    def _remove(self, subscription: Subscription) -> None:
        self._subscribers = [ref for ref in self._subscribers if ref() not in (None, subscription)]

    def _broadcast(self, value: Any) -> None:
        for subscription in self._live_subscribers():
            self.context.post(self._deliver, weakref.ref(subscription), value)

    def _deliver(self, ref: "weakref.ref[Subscription]", value: Any) -> None:
        subscription = ref()
        if subscription is None or not subscription.active:
            return
        try:
            subscription.callback(value)
        except Exception:
            logger.exception(f"Subscriber of {self.name} failed")


class Observable(_Channel, Generic[T]):
    """A state value whose changes are broadcast to subscribers."""

    def __init__(self, context: ExecutionContext, initial: T, name: str | None = None):
        super().__init__(context, name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Store a new value and broadcast it if it differs from the current one.

        Returns:
            True if the value changed
        """
        if value == self._value:
            return False
        self._value = value
        self._broadcast(value)
        return True

    def subscribe(self, callback: Callable[[T], Any], *, replay: bool = False) -> Subscription:
        """Register a callback, optionally queueing the current value for it first."""
        subscription = super().subscribe(callback)
        if replay:
            self.context.post(self._deliver, weakref.ref(subscription), self._value)
        return subscription

    def __repr__(self) -> str:
        return f"<Observable({self.name}={self._value!r})>"


class Signal(_Channel):
    """Event stream without a stored value (e.g. a one-shot completion event)."""

    def emit(self, payload: Any = None) -> None:
        self._broadcast(payload)
