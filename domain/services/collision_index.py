from __future__ import annotations

from typing import List

from domain.models import LayoutInvariantError, PlacedEvent
from domain.services.uniqueness import unique


class CollisionIndex:
    """Events committed to each column, queried one column at a time.

    Columns are 1-indexed and must be opened before use. A freshly opened
    column holds no events and therefore never reports a collision.
    """

    def __init__(self) -> None:
        self._columns: List[List[PlacedEvent]] = []

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def open_column(self) -> int:
        self._columns.append([])
        return len(self._columns)

    def add(self, event: PlacedEvent, column: int) -> None:
        self._column(column).append(event)

    def colliding(self, candidate: PlacedEvent, column: int) -> List[PlacedEvent]:
        return [event for event in self._column(column) if candidate.collides_with(event)]

    def has_collision(self, candidate: PlacedEvent, column: int) -> bool:
        return any(candidate.collides_with(event) for event in self._column(column))

    def direct_collisions(self, candidate: PlacedEvent, column: int) -> List[PlacedEvent]:
        """Collect events in columns ``column - 1`` down to 1 that overlap ``candidate``."""
        found: List[PlacedEvent] = []
        for previous in range(column - 1, 0, -1):
            found.extend(self.colliding(candidate, previous))
        return unique(found)

    def _column(self, column: int) -> List[PlacedEvent]:
        if not 1 <= column <= len(self._columns):
            msg = f"Column {column} is not open (open columns: {len(self._columns)})"
            raise LayoutInvariantError(msg)
        return self._columns[column - 1]
