from __future__ import annotations

from typing import Any

from domain.models import CalendarDay, LayoutPlan
from domain.ports.layout import LayoutEngine


class DayLayoutService:
    def __init__(self, engine: LayoutEngine) -> None:
        self._engine = engine

    def lay_out(self, day: CalendarDay) -> LayoutPlan:
        return self._engine.build_plan(day.intervals(), container_width=day.container_width)

    def lay_out_payload(self, payload: Any) -> LayoutPlan:
        # Validation of every record finishes before any event is placed.
        return self.lay_out(CalendarDay.from_payload(payload))
