"""Domain exception hierarchy for the statebus coordination layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import DeliveryFailure


class StateBusError(RuntimeError):
    """Base class for all domain-level coordination errors."""


class InvalidKeyError(StateBusError):
    """Raised when an event name or state key is empty or not a string."""


class InvalidListenerError(StateBusError):
    """Raised when a listener is not callable."""


class InvalidPartialError(StateBusError):
    """Raised when a state update is not a mapping of string keys."""


class PartialDeliveryFailureError(StateBusError):
    """Raised on demand when one or more listeners failed during a delivery pass."""

    def __init__(self, key: str, failures: tuple[DeliveryFailure, ...]) -> None:
        self.key = key
        self.failures = failures
        super().__init__(
            f"{len(failures)} listener(s) failed during delivery of {key!r}"
        )


class ConfigValidationError(StateBusError):
    """Raised when configuration cannot be validated safely."""
