from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import CalendarDay, LayoutPlan


class CalendarRepository(Protocol):
    def load_all(self, directory: Path) -> Sequence[CalendarDay]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, CalendarDay]]: ...

    def load_by_path(self, path: Path) -> CalendarDay: ...


class LayoutRepository(Protocol):
    def save(self, plan: LayoutPlan, path: Path) -> None: ...
