from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List

from domain.models import LayoutInvariantError, PlacedEvent
from domain.services.uniqueness import unique

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Cluster:
    cluster_id: int
    members: List[PlacedEvent] = field(default_factory=list)

    @property
    def max_column(self) -> int:
        return max((member.column for member in self.members), default=0)

    def __len__(self) -> int:
        return len(self.members)


class ClusterTracker:
    """Partition of placed events into collision clusters.

    Clusters live in an arena keyed by a stable id and every placed event maps
    to the id of the cluster that holds it. Clusters only ever grow by merging;
    a merge moves the absorbed members and drops the absorbed ids.
    """

    def __init__(self) -> None:
        self._clusters: Dict[int, Cluster] = {}
        self._cluster_ids: Dict[PlacedEvent, int] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._clusters)

    def clusters(self) -> List[Cluster]:
        return list(self._clusters.values())

    def cluster_of(self, event: PlacedEvent) -> Cluster:
        cluster_id = self._cluster_ids.get(event)
        if cluster_id is None:
            msg = f"Event #{event.index} does not belong to any cluster"
            raise LayoutInvariantError(msg)
        return self._clusters[cluster_id]

    def place(self, event: PlacedEvent, collisions: Iterable[PlacedEvent]) -> Cluster:
        if event in self._cluster_ids:
            msg = f"Event #{event.index} is already tracked"
            raise LayoutInvariantError(msg)

        found_ids = unique(self.cluster_of(collision).cluster_id for collision in collisions)
        if not found_ids:
            survivor = self._new_cluster()
        else:
            survivor = self._clusters[found_ids[0]]
            for absorbed_id in found_ids[1:]:
                self._absorb(survivor, absorbed_id)

        survivor.members.append(event)
        self._cluster_ids[event] = survivor.cluster_id
        return survivor

    def _new_cluster(self) -> Cluster:
        cluster = Cluster(cluster_id=self._next_id)
        self._clusters[cluster.cluster_id] = cluster
        self._next_id += 1
        return cluster

    def _absorb(self, survivor: Cluster, absorbed_id: int) -> None:
        absorbed = self._clusters.pop(absorbed_id)
        for member in absorbed.members:
            self._cluster_ids[member] = survivor.cluster_id
        survivor.members.extend(absorbed.members)
        logger.debug(
            "Merged cluster %d (%d events) into cluster %d",
            absorbed_id,
            len(absorbed),
            survivor.cluster_id,
        )
