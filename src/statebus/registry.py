"""Ordered listener bookkeeping shared by the event bus and the store."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import itertools
import logging

from .exceptions import InvalidKeyError, InvalidListenerError
from .types import ListenerHandle, Subscription

LOGGER = logging.getLogger(__name__)

_REGISTRY_IDS = itertools.count(1)


def validate_key(key: object) -> str:
    """Return ``key`` if it is a usable event name or state key."""
    if not isinstance(key, str):
        raise InvalidKeyError(f"Key must be a string, got {type(key).__name__}.")
    if not key.strip():
        raise InvalidKeyError("Key must not be empty.")
    return key


class SubscriptionRegistry:
    """Map keys to listeners in registration order.

    Each key owns an insertion-ordered dict of subscriptions, so iteration
    order is delivery order. Handle ids come from a counter that only moves
    forward, so a handle is never reissued after it has been removed.
    """

    def __init__(self, name: str = "registry") -> None:
        self.name = name
        self._owner = next(_REGISTRY_IDS)
        self._counter = itertools.count(1)
        self._by_key: dict[str, dict[int, Subscription]] = {}

    def subscribe(self, key: str, listener: Callable[..., object]) -> ListenerHandle:
        """Register ``listener`` under ``key`` and return its handle."""
        validate_key(key)
        if not callable(listener):
            raise InvalidListenerError(
                f"Listener must be callable, got {type(listener).__name__}."
            )
        handle = ListenerHandle(owner=self._owner, id=next(self._counter), key=key)
        self._by_key.setdefault(key, {})[handle.id] = Subscription(
            handle=handle, key=key, listener=listener
        )
        LOGGER.debug(
            "registry.subscribed",
            extra={
                "event": "registry.subscribed",
                "registry": self.name,
                "key": key,
                "handle": handle.id,
            },
        )
        return handle

    def unsubscribe(self, handle: ListenerHandle) -> bool:
        """Remove the subscription for ``handle``; unknown handles are ignored."""
        if not isinstance(handle, ListenerHandle) or handle.owner != self._owner:
            return False
        bucket = self._by_key.get(handle.key)
        if bucket is None or bucket.pop(handle.id, None) is None:
            return False
        if not bucket:
            del self._by_key[handle.key]
        LOGGER.debug(
            "registry.unsubscribed",
            extra={
                "event": "registry.unsubscribed",
                "registry": self.name,
                "key": handle.key,
                "handle": handle.id,
            },
        )
        return True

    def listeners(self, key: str) -> tuple[Subscription, ...]:
        """Return the current subscriptions for ``key`` in registration order."""
        bucket = self._by_key.get(key)
        if not bucket:
            return ()
        return tuple(bucket.values())

    def listeners_for(self, keys: Iterable[str]) -> tuple[Subscription, ...]:
        """Return subscriptions for several keys in global registration order."""
        merged: dict[int, Subscription] = {}
        for key in keys:
            merged.update(self._by_key.get(key, {}))
        return tuple(merged[handle_id] for handle_id in sorted(merged))

    def clear(self, key: str) -> int:
        """Drop every subscription for ``key``; return how many were removed."""
        return len(self._by_key.pop(key, {}))

    def clear_all(self) -> int:
        """Drop every subscription; return how many were removed."""
        removed = len(self)
        self._by_key.clear()
        return removed

    def keys(self) -> tuple[str, ...]:
        return tuple(self._by_key)

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, ListenerHandle) or handle.owner != self._owner:
            return False
        return handle.id in self._by_key.get(handle.key, {})

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._by_key.values())
