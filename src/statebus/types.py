"""Shared value types passed between the registry, bus and store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import PartialDeliveryFailureError

if TYPE_CHECKING:
    from .snapshot import StateSnapshot

EventListener = Callable[[Any], object]
StateListener = Callable[["StateSnapshot"], object]


@dataclass(frozen=True, slots=True)
class ListenerHandle:
    """Opaque subscription token.

    Only identity matters to callers. ``owner`` ties the handle to the registry
    that issued it and ``key`` lets that registry find the subscription
    without scanning every key.
    """

    owner: int
    id: int
    key: str = field(compare=False)


@dataclass(frozen=True, slots=True)
class Subscription:
    """A single registered listener under one key."""

    handle: ListenerHandle
    key: str
    listener: Callable[..., object]


@dataclass(frozen=True, slots=True)
class DeliveryFailure:
    """One listener that raised during a delivery pass."""

    key: str
    handle: ListenerHandle
    error: Exception


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Aggregate outcome of one delivery pass.

    ``attempted`` counts every listener invoked, including the ones that
    raised and appear in ``failures``.
    """

    key: str
    attempted: int = 0
    failures: tuple[DeliveryFailure, ...] = ()

    @property
    def ok(self) -> bool:
        """Return True when every attempted listener succeeded."""
        return not self.failures

    @property
    def failed_handles(self) -> tuple[ListenerHandle, ...]:
        return tuple(failure.handle for failure in self.failures)

    def raise_for_failures(self) -> None:
        """Raise ``PartialDeliveryFailureError`` if any listener failed."""
        if self.failures:
            raise PartialDeliveryFailureError(self.key, self.failures)
