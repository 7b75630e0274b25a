from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_CONTAINER_WIDTH = 600.0
PENDING_COLUMN = 0


class LayoutInvariantError(RuntimeError):
    """Raised when the layout algorithm reaches a state it should never reach."""


class CalendarEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start: float = Field(..., strict=True, allow_inf_nan=False)
    end: float = Field(..., strict=True, allow_inf_nan=False)

    @model_validator(mode="after")
    def ensure_positive_length(self) -> CalendarEvent:
        if self.start >= self.end:
            msg = f"Event start must be before end: start={self.start}, end={self.end}"
            raise ValueError(msg)
        return self

    def to_interval(self) -> Interval:
        return Interval(start=self.start, end=self.end)


class CalendarDay(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)
    container_width: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)

    @classmethod
    def from_payload(cls, payload: Any) -> CalendarDay:
        # A bare list is the legacy layOutDay([...]) call shape.
        if isinstance(payload, list):
            return cls.model_validate({"events": payload})
        if isinstance(payload, Mapping):
            return cls.model_validate(dict(payload))
        return cls.model_validate(payload)

    def intervals(self) -> List[Interval]:
        return [event.to_interval() for event in self.events]


@dataclass(frozen=True, eq=False)
class Interval:
    start: float
    end: float

    def __post_init__(self) -> None:
        for bound in (self.start, self.end):
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                msg = f"Interval bounds must be numbers: start={self.start!r}, end={self.end!r}"
                raise ValueError(msg)
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            msg = f"Interval bounds must be finite: start={self.start}, end={self.end}"
            raise ValueError(msg)
        if self.start >= self.end:
            msg = f"Interval start must be before end: start={self.start}, end={self.end}"
            raise ValueError(msg)

    def collides_with(self, other: Interval) -> bool:
        # Half-open ranges: touching endpoints do not collide.
        return self.start < other.end and other.start < self.end


@dataclass(eq=False)
class PlacedEvent:
    interval: Interval
    index: int
    left: float = 0.0
    width: float = DEFAULT_CONTAINER_WIDTH
    column: int = PENDING_COLUMN
    collisions: List[PlacedEvent] = field(default_factory=list)

    @property
    def start(self) -> float:
        return self.interval.start

    @property
    def end(self) -> float:
        return self.interval.end

    @property
    def is_placed(self) -> bool:
        return self.column != PENDING_COLUMN

    def collides_with(self, other: PlacedEvent) -> bool:
        return self.interval.collides_with(other.interval)

    def assign_column(self, column: int) -> None:
        if self.is_placed:
            msg = f"Event #{self.index} already placed in column {self.column}"
            raise LayoutInvariantError(msg)
        if column < 1:
            msg = f"Column must be >= 1, got {column}"
            raise LayoutInvariantError(msg)
        self.column = column

    def resize(self, container_width: float, max_column: int) -> None:
        self.width = container_width / max_column
        self.left = self.width * (self.column - 1)

    def to_result(self) -> LayoutResult:
        return LayoutResult(
            index=self.index,
            start=self.start,
            end=self.end,
            column=self.column,
            left=self.left,
            width=self.width,
        )


@dataclass(frozen=True)
class LayoutResult:
    index: int
    start: float
    end: float
    column: int
    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "start": self.start,
            "end": self.end,
            "column": self.column,
            "left": self.left,
            "width": self.width,
        }


@dataclass(frozen=True)
class LayoutPlan:
    container_width: float
    results: List[LayoutResult]
    clusters: List[Tuple[int, ...]]
    column_count: int

    def to_dict(self) -> dict:
        return {
            "container_width": self.container_width,
            "column_count": self.column_count,
            "events": [result.to_dict() for result in self.results],
            "clusters": [list(cluster) for cluster in self.clusters],
        }
