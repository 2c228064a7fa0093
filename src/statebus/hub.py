"""A single coordination domain: one event bus and one store."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

from . import bridge
from .bus import EventBus
from .store import Store
from .types import ListenerHandle

LOGGER = logging.getLogger(__name__)


class Hub:
    """Own an ``EventBus`` and a ``Store`` and tear both down together.

    Modules receive the hub (or its ``bus`` and ``store``) instead of reaching
    for module-level globals, so every writer of shared state is explicit.
    """

    def __init__(
        self, bus: EventBus | None = None, store: Store | None = None
    ) -> None:
        self.bus = bus if bus is not None else EventBus()
        self.store = store if store is not None else Store()
        self._bridge_handle: ListenerHandle | None = None
        self._closed = False

    @classmethod
    def from_config(cls, config: dict[str, dict[str, Any]]) -> Hub:
        """Build a hub from a validated mapping returned by ``load_config``."""
        bus_config = config.get("bus", {})
        store_config = config.get("store", {})
        bridge_config = config.get("bridge", {})

        hub = cls(
            bus=EventBus(log_failures=bool(bus_config.get("log_failures", True))),
            store=Store(
                store_config.get("initial_state") or None,
                log_failures=bool(store_config.get("log_failures", True)),
            ),
        )
        if bridge_config.get("enabled", False):
            hub.connect_bridge(
                bridge_config.get("event_name", bridge.DEFAULT_EVENT_NAME)
            )
        return hub

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def bridged(self) -> bool:
        return self._bridge_handle is not None

    def connect_bridge(
        self, event_name: str = bridge.DEFAULT_EVENT_NAME
    ) -> ListenerHandle:
        """Publish store changes on the bus; replaces any earlier bridge."""
        self.disconnect_bridge()
        self._bridge_handle = bridge.connect(self.store, self.bus, event_name)
        return self._bridge_handle

    def disconnect_bridge(self) -> None:
        if self._bridge_handle is not None:
            bridge.disconnect(self.store, self._bridge_handle)
            self._bridge_handle = None

    def close(self) -> None:
        """Drop every bus and store subscription. Safe to call more than once."""
        if self._closed:
            return
        self._bridge_handle = None
        removed_events = self.bus.clear()
        removed_state = self.store.clear_subscribers()
        self._closed = True
        LOGGER.info(
            "hub.closed",
            extra={
                "event": "hub.closed",
                "bus_subscriptions": removed_events,
                "store_subscriptions": removed_state,
            },
        )

    def __enter__(self) -> Hub:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
