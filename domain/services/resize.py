from __future__ import annotations

from domain.services.cluster_tracker import Cluster


def resize_cluster(cluster: Cluster, container_width: float) -> None:
    """Split the container evenly across the widest column used in ``cluster``."""
    max_column = cluster.max_column
    for member in cluster.members:
        member.resize(container_width, max_column)
