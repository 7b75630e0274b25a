from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import CalendarDay, LayoutPlan
from domain.ports.repositories import CalendarRepository, LayoutRepository

LAYOUT_SUFFIX = ".layout.json"


class FileSystemCalendarRepository(CalendarRepository):
    def load_all(self, directory: Path) -> list[CalendarDay]:
        return [day for _, day in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, CalendarDay]]:
        return [(path, self.load_by_path(path)) for path in sorted(self._iter_paths(directory))]

    def load_by_path(self, path: Path) -> CalendarDay:
        return CalendarDay.from_payload(load_json(path))

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for path in directory.glob("*.json"):
            # Skip layouts written back into the same directory.
            if path.name.endswith(LAYOUT_SUFFIX):
                continue
            yield path


class FileSystemLayoutRepository(LayoutRepository):
    def save(self, plan: LayoutPlan, path: Path) -> None:
        write_json_atomic(path, plan.to_dict())


def layout_path_for(day_path: Path, output_dir: Path) -> Path:
    return output_dir / f"{day_path.stem}{LAYOUT_SUFFIX}"
