from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from domain.models import Interval, PlacedEvent

EventT = TypeVar("EventT", Interval, PlacedEvent)


def sort_for_layout(events: Iterable[EventT]) -> list[EventT]:
    # sorted() is stable, so events with equal bounds keep their input order.
    return sorted(events, key=lambda event: (event.start, event.end))
