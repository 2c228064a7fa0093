"""Run one isolated delivery pass over a fixed list of subscriptions."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

from .types import DeliveryFailure, DeliveryResult, Subscription


def deliver(
    key: str,
    subscriptions: Sequence[Subscription],
    payload: Any,
    *,
    logger: logging.Logger,
    event: str,
    log_failures: bool = True,
) -> DeliveryResult:
    """Invoke every subscription in order, recording failures instead of raising.

    ``subscriptions`` must already be a snapshot taken by the caller; changes
    made to the registry while listeners run never reach this pass.
    """
    failures: list[DeliveryFailure] = []
    for subscription in subscriptions:
        try:
            subscription.listener(payload)
        except Exception as exc:  # noqa: BLE001 - listener errors are isolated.
            failures.append(
                DeliveryFailure(key=key, handle=subscription.handle, error=exc)
            )
            if log_failures:
                logger.warning(
                    event,
                    exc_info=exc,
                    extra={
                        "event": event,
                        "key": key,
                        "handle": subscription.handle.id,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
    return DeliveryResult(
        key=key, attempted=len(subscriptions), failures=tuple(failures)
    )
