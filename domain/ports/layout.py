from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from domain.models import Interval, LayoutPlan


class LayoutEngine(Protocol):
    def build_plan(
        self, intervals: Sequence[Interval], container_width: float | None = None
    ) -> LayoutPlan:
        ...
