"""Forward store changes onto an event bus."""

from __future__ import annotations

import logging

from .bus import EventBus
from .registry import validate_key
from .snapshot import StateSnapshot
from .store import Store
from .types import ListenerHandle

LOGGER = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "state.changed"


def connect(
    store: Store, bus: EventBus, event_name: str = DEFAULT_EVENT_NAME
) -> ListenerHandle:
    """Publish every new snapshot of ``store`` on ``bus`` as ``event_name``.

    Bus listener failures are logged by the bus and do not count as a failure
    of the store listener.
    """
    validate_key(event_name)

    def forward(snapshot: StateSnapshot) -> None:
        bus.publish(event_name, snapshot)

    handle = store.subscribe(forward)
    LOGGER.debug(
        "bridge.connected",
        extra={"event": "bridge.connected", "key": event_name, "handle": handle.id},
    )
    return handle


def disconnect(store: Store, handle: ListenerHandle) -> None:
    store.unsubscribe(handle)
