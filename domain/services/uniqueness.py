from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T")


def unique(items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> list[T]:
    """Return ``items`` without repeats, keeping the first occurrence of each.

    Items are compared by ``key(item)`` when a key is given, otherwise by their
    own hash and equality. Placed events use identity equality, so two events
    with the same bounds are still kept apart.
    """
    seen: set[Hashable] = set()
    result: list[T] = []
    for item in items:
        marker = key(item) if key is not None else item
        if marker in seen:
            continue
        seen.add(marker)
        result.append(item)
    return result
