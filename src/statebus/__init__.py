"""Top-level package for statebus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .bus import EventBus
    from .config import ensure_config_dir, load_config
    from .exceptions import (
        ConfigValidationError,
        InvalidKeyError,
        InvalidListenerError,
        InvalidPartialError,
        PartialDeliveryFailureError,
        StateBusError,
    )
    from .hub import Hub
    from .logging_utils import configure_logging
    from .registry import SubscriptionRegistry
    from .snapshot import StateSnapshot, merge
    from .store import StateChange, Store
    from .types import DeliveryFailure, DeliveryResult, ListenerHandle

__all__ = [
    "ConfigValidationError",
    "DeliveryFailure",
    "DeliveryResult",
    "EventBus",
    "Hub",
    "InvalidKeyError",
    "InvalidListenerError",
    "InvalidPartialError",
    "ListenerHandle",
    "PartialDeliveryFailureError",
    "StateBusError",
    "StateChange",
    "StateSnapshot",
    "Store",
    "SubscriptionRegistry",
    "configure_logging",
    "ensure_config_dir",
    "load_config",
    "merge",
]

_EXPORTS = {
    "EventBus": ".bus",
    "ensure_config_dir": ".config",
    "load_config": ".config",
    "ConfigValidationError": ".exceptions",
    "InvalidKeyError": ".exceptions",
    "InvalidListenerError": ".exceptions",
    "InvalidPartialError": ".exceptions",
    "PartialDeliveryFailureError": ".exceptions",
    "StateBusError": ".exceptions",
    "Hub": ".hub",
    "configure_logging": ".logging_utils",
    "SubscriptionRegistry": ".registry",
    "StateSnapshot": ".snapshot",
    "merge": ".snapshot",
    "StateChange": ".store",
    "Store": ".store",
    "DeliveryFailure": ".types",
    "DeliveryResult": ".types",
    "ListenerHandle": ".types",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols so pydantic and structlog load only when needed."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module

    return getattr(import_module(module_name, __name__), name)
