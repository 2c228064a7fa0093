"""Reactive store holding the shared state snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

from .delivery import deliver
from .exceptions import InvalidKeyError
from .registry import SubscriptionRegistry
from .snapshot import StateSnapshot, validate_partial
from .types import DeliveryResult, ListenerHandle, StateListener

LOGGER = logging.getLogger(__name__)

# Whole-state listeners and key watchers live in separate registry namespaces,
# so every string is a legal state key.
ALL_KEYS = "all"
WATCH_PREFIX = "key:"

# Label reported on store delivery results and failures.
DELIVERY_KEY = "state"

_MISSING = object()


@dataclass(frozen=True, slots=True)
class StateChange:
    """Outcome of one committed update and its notification pass."""

    previous: StateSnapshot
    current: StateSnapshot
    changed_keys: tuple[str, ...]
    delivery: DeliveryResult


def _value_changed(old: Any, new: Any) -> bool:
    if old is _MISSING:
        return True
    if old is new:
        return False
    try:
        return bool(old != new)
    except Exception:  # noqa: BLE001 - e.g. array comparisons.
        return True


class Store:
    """Own the current snapshot and notify listeners when it is replaced.

    The snapshot is swapped in before any listener runs, so every listener,
    including ones reached through a nested ``set_state``, reads the latest
    committed state from ``get_state``.
    """

    def __init__(
        self,
        initial_state: Mapping[str, Any] | None = None,
        *,
        log_failures: bool = True,
    ) -> None:
        if initial_state is not None:
            validate_partial(initial_state)
        self._state = StateSnapshot(initial_state)
        self._registry = SubscriptionRegistry(name="store")
        self.log_failures = log_failures

    def get_state(self) -> StateSnapshot:
        """Return the current snapshot."""
        return self._state

    def select(self, key: str, default: Any = None) -> Any:
        """Return one value from the current snapshot."""
        return self._state.get(key, default)

    def set_state(self, partial: Mapping[str, Any]) -> StateSnapshot:
        """Merge ``partial`` into the state and notify listeners.

        Returns the new snapshot. Listener failures are logged; use ``update``
        to get the aggregate ``DeliveryResult`` of the notification pass.
        """
        return self.update(partial).current

    def update(self, partial: Mapping[str, Any]) -> StateChange:
        """Apply ``partial`` like ``set_state`` and return the full ``StateChange``."""
        validate_partial(partial)

        previous = self._state
        current = previous.merge(partial)
        changed_keys = tuple(
            key
            for key, value in partial.items()
            if _value_changed(previous.get(key, _MISSING), value)
        )
        self._state = current

        subscriptions = self._registry.listeners_for(
            (ALL_KEYS, *(WATCH_PREFIX + key for key in changed_keys))
        )
        delivery = deliver(
            DELIVERY_KEY,
            subscriptions,
            current,
            logger=LOGGER,
            event="store.listener.failed",
            log_failures=self.log_failures,
        )
        LOGGER.debug(
            "store.updated",
            extra={
                "event": "store.updated",
                "changed_keys": list(changed_keys),
                "notified": delivery.attempted,
                "failed": len(delivery.failures),
            },
        )
        return StateChange(
            previous=previous,
            current=current,
            changed_keys=changed_keys,
            delivery=delivery,
        )

    def subscribe(self, listener: StateListener) -> ListenerHandle:
        """Call ``listener`` with the new snapshot after every update."""
        return self._registry.subscribe(ALL_KEYS, listener)

    def watch(self, key: str, listener: StateListener) -> ListenerHandle:
        """Call ``listener`` with the new snapshot when ``key`` changes value."""
        if not isinstance(key, str):
            raise InvalidKeyError(
                f"State key must be a string, got {type(key).__name__}."
            )
        return self._registry.subscribe(WATCH_PREFIX + key, listener)

    def unsubscribe(self, handle: ListenerHandle) -> None:
        """Stop a subscription. Unknown or already removed handles are ignored."""
        self._registry.unsubscribe(handle)

    def clear_subscribers(self) -> int:
        return self._registry.clear_all()

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)
