from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import List

from domain.models import (
    DEFAULT_CONTAINER_WIDTH,
    Interval,
    LayoutPlan,
    PlacedEvent,
)
from domain.ports.layout import LayoutEngine
from domain.services.cluster_tracker import ClusterTracker
from domain.services.collision_index import CollisionIndex
from domain.services.resize import resize_cluster
from domain.services.sorting import sort_for_layout

logger = logging.getLogger(__name__)


def ensure_container_width(width: float) -> float:
    if not math.isfinite(width) or width <= 0:
        msg = f"container_width must be a positive finite number, got {width}"
        raise ValueError(msg)
    return width


@dataclass(frozen=True)
class LayoutConfig:
    container_width: float = DEFAULT_CONTAINER_WIDTH

    def __post_init__(self) -> None:
        ensure_container_width(self.container_width)


class GreedyColumnLayoutEngine(LayoutEngine):
    """Greedy first-fit column assignment with per-cluster width sharing.

    Each pass opens the next column and walks the still-pending events in
    (start, end) order, committing every event that fits. Committed events
    never move; only their left/width are recomputed when their cluster grows.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def build_plan(
        self, intervals: Sequence[Interval], container_width: float | None = None
    ) -> LayoutPlan:
        width = ensure_container_width(
            self.config.container_width if container_width is None else container_width
        )

        events = [
            PlacedEvent(interval=interval, index=index, width=width)
            for index, interval in enumerate(intervals)
        ]
        collision_index = CollisionIndex()
        tracker = ClusterTracker()

        pending = sort_for_layout(events)
        while pending:
            column = collision_index.open_column()
            still_pending: List[PlacedEvent] = []
            for event in pending:
                if collision_index.has_collision(event, column):
                    still_pending.append(event)
                    continue
                collision_index.add(event, column)
                event.assign_column(column)
                event.collisions = collision_index.direct_collisions(event, column)
                cluster = tracker.place(event, event.collisions)
                resize_cluster(cluster, width)
            logger.debug(
                "Column %d: placed %d events, %d pending",
                column,
                len(pending) - len(still_pending),
                len(still_pending),
            )
            pending = still_pending

        clusters = [
            tuple(sorted(member.index for member in cluster.members))
            for cluster in tracker.clusters()
        ]
        return LayoutPlan(
            container_width=width,
            results=[event.to_result() for event in events],
            clusters=clusters,
            column_count=collision_index.column_count,
        )
