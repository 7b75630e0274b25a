from __future__ import annotations

import pytest

from domain.models import Interval, LayoutInvariantError, PlacedEvent
from domain.services.cluster_tracker import ClusterTracker
from domain.services.resize import resize_cluster


def _placed(start: float, end: float, column: int, index: int) -> PlacedEvent:
    event = PlacedEvent(interval=Interval(start, end), index=index)
    event.assign_column(column)
    return event


def test_event_without_collisions_starts_its_own_cluster() -> None:
    tracker = ClusterTracker()
    first = _placed(0, 10, 1, 0)
    second = _placed(20, 30, 1, 1)

    first_cluster = tracker.place(first, [])
    second_cluster = tracker.place(second, [])

    assert first_cluster is not second_cluster
    assert first_cluster.members == [first]
    assert second_cluster.members == [second]
    assert len(tracker) == 2


def test_bridging_event_merges_clusters_into_first_found() -> None:
    tracker = ClusterTracker()
    left = _placed(540, 600, 1, 0)
    right = _placed(610, 670, 1, 1)
    left_cluster = tracker.place(left, [])
    right_cluster = tracker.place(right, [])
    bridge = _placed(560, 620, 2, 2)

    merged = tracker.place(bridge, [left, right])

    assert merged is left_cluster
    assert merged.members == [left, right, bridge]
    assert merged.max_column == 2
    assert tracker.clusters() == [left_cluster]
    assert tracker.cluster_of(right) is left_cluster
    assert right_cluster.cluster_id not in {cluster.cluster_id for cluster in tracker.clusters()}


def test_discovery_order_picks_the_survivor() -> None:
    tracker = ClusterTracker()
    left = _placed(0, 10, 1, 0)
    right = _placed(20, 30, 1, 1)
    tracker.place(left, [])
    right_cluster = tracker.place(right, [])
    bridge = _placed(5, 25, 2, 2)

    merged = tracker.place(bridge, [right, left])

    assert merged is right_cluster
    assert merged.members == [right, left, bridge]


def test_collisions_within_one_cluster_do_not_merge_twice() -> None:
    tracker = ClusterTracker()
    first = _placed(0, 100, 1, 0)
    second = _placed(0, 100, 2, 1)
    cluster = tracker.place(first, [])
    tracker.place(second, [first])
    third = _placed(0, 100, 3, 2)

    merged = tracker.place(third, [second, first])

    assert merged is cluster
    assert merged.members == [first, second, third]
    assert len(tracker) == 1


def test_unknown_collision_event_is_an_internal_error() -> None:
    tracker = ClusterTracker()
    stray = _placed(0, 10, 1, 0)

    with pytest.raises(LayoutInvariantError):
        tracker.place(_placed(5, 15, 2, 1), [stray])


def test_placing_same_event_twice_is_an_internal_error() -> None:
    tracker = ClusterTracker()
    event = _placed(0, 10, 1, 0)
    tracker.place(event, [])

    with pytest.raises(LayoutInvariantError):
        tracker.place(event, [])


def test_resize_is_idempotent_on_a_stable_cluster() -> None:
    tracker = ClusterTracker()
    first = _placed(0, 100, 1, 0)
    second = _placed(50, 150, 2, 1)
    tracker.place(first, [])
    cluster = tracker.place(second, [first])

    resize_cluster(cluster, 600)
    snapshot = [(member.left, member.width) for member in cluster.members]
    resize_cluster(cluster, 600)
    resize_cluster(cluster, 600)

    assert [(member.left, member.width) for member in cluster.members] == snapshot
    assert snapshot == [(0.0, 300.0), (300.0, 300.0)]
