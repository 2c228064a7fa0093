"""Immutable state snapshots and shallow merge."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .exceptions import InvalidPartialError


class StateSnapshot(Mapping[str, Any]):
    """Read-only mapping holding the whole shared state at one instant.

    A snapshot never changes after construction; ``merge`` always returns a
    new instance. Values themselves are owned by the caller.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StateSnapshot({self._data!r})"

    def merge(self, partial: Mapping[str, Any]) -> StateSnapshot:
        """Return a new snapshot with ``partial`` keys overwriting this one."""
        validate_partial(partial)
        merged = dict(self._data)
        merged.update(partial)
        return StateSnapshot(merged)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow, mutable copy of the snapshot contents."""
        return dict(self._data)


EMPTY_SNAPSHOT = StateSnapshot()


def validate_partial(partial: Any) -> None:
    """Raise ``InvalidPartialError`` unless ``partial`` maps string keys."""
    if not isinstance(partial, Mapping):
        raise InvalidPartialError(
            f"State update must be a mapping, got {type(partial).__name__}."
        )
    for key in partial:
        if not isinstance(key, str):
            raise InvalidPartialError(f"State keys must be strings, got {key!r}.")


def merge(base: Mapping[str, Any], partial: Mapping[str, Any]) -> StateSnapshot:
    """Shallow key-wise overwrite of ``base`` by ``partial``."""
    if isinstance(base, StateSnapshot):
        return base.merge(partial)
    validate_partial(base)
    return StateSnapshot(base).merge(partial)
