"""Event bus for decoupled component communication.

Usage:
    bus = EventBus()

    def on_ready(payload):
        print(f"ready: {payload}")

    handle = bus.subscribe("module.ready", on_ready)
    result = bus.publish("module.ready", {"module": "inventory"})
    result.raise_for_failures()
    bus.unsubscribe(handle)
"""

from __future__ import annotations

import logging
from typing import Any

from .delivery import deliver
from .exceptions import InvalidListenerError
from .registry import SubscriptionRegistry, validate_key
from .types import DeliveryResult, EventListener, ListenerHandle

LOGGER = logging.getLogger(__name__)


class EventBus:
    """Synchronous publish/subscribe bus.

    Lets modules talk through named events instead of direct method calls.
    Listeners run in registration order; one failing listener never stops
    delivery to the rest.
    """

    def __init__(self, *, log_failures: bool = True) -> None:
        self._registry = SubscriptionRegistry(name="bus")
        self.log_failures = log_failures

    def subscribe(self, name: str, listener: EventListener) -> ListenerHandle:
        """Subscribe to an event.

        Args:
            name: Event to listen for (e.g., "module.ready")
            listener: Called with the payload of each matching publish

        Returns:
            Handle accepted by ``unsubscribe``.
        """
        return self._registry.subscribe(name, listener)

    def subscribe_once(self, name: str, listener: EventListener) -> ListenerHandle:
        """Subscribe a listener that is removed before its first invocation."""
        if not callable(listener):
            raise InvalidListenerError(
                f"Listener must be callable, got {type(listener).__name__}."
            )
        handle: ListenerHandle | None = None

        def once(payload: Any) -> None:
            if handle is None or not self._registry.unsubscribe(handle):
                return
            listener(payload)

        handle = self._registry.subscribe(name, once)
        return handle

    def unsubscribe(self, handle: ListenerHandle) -> None:
        """Stop a subscription. Unknown or already removed handles are ignored."""
        self._registry.unsubscribe(handle)

    def publish(self, name: str, payload: Any = None) -> DeliveryResult:
        """Deliver ``payload`` to every listener currently subscribed to ``name``.

        Args:
            name: Event name
            payload: Passed unchanged to each listener

        Returns:
            Aggregate result; ``failures`` lists listeners that raised.
        """
        validate_key(name)
        subscriptions = self._registry.listeners(name)
        if not subscriptions:
            LOGGER.debug(
                "bus.publish.no_subscribers",
                extra={"event": "bus.publish.no_subscribers", "key": name},
            )
            return DeliveryResult(key=name)
        return deliver(
            name,
            subscriptions,
            payload,
            logger=LOGGER,
            event="bus.listener.failed",
            log_failures=self.log_failures,
        )

    def subscriber_count(self, name: str) -> int:
        return len(self._registry.listeners(name))

    def clear(self, name: str | None = None) -> int:
        """Clear subscribers.

        Args:
            name: Specific event to clear, or None for all
        """
        if name is not None:
            validate_key(name)
            return self._registry.clear(name)
        return self._registry.clear_all()
