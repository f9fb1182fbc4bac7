"""Repository interface shared by the storage backends."""
from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Load/save a whole named document. Both calls may raise I/O errors."""

    def load(self) -> Any:
        ...

    def save(self, value: Any) -> None:
        ...


def fresh_default(default: Any) -> Any:
    """Return an independent copy so callers can mutate the default safely."""
    return copy.deepcopy(default)


def matches_default(value: Any, default: Any) -> bool:
    """A stored value is usable when it has the same container type as the default."""
    if isinstance(default, list):
        return isinstance(value, list)
    if isinstance(default, dict):
        return isinstance(value, dict)
    return True
