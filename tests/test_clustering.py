from __future__ import annotations

import numpy as np
import pytest

from study_kmeans.clustering import (
    assign_clusters,
    calculate_centroid_change,
    distance,
    has_converged,
    initialize_centroids,
    update_centroids,
)
from study_kmeans.errors import InsufficientData
from study_kmeans.models import Centroid, NormalizedPoint


@pytest.fixture
def square_points():
    return [
        NormalizedPoint(0.0, 0.1),
        NormalizedPoint(0.1, 0.0),
        NormalizedPoint(0.9, 1.0),
        NormalizedPoint(1.0, 0.9),
    ]


def test_distance_is_euclidean():
    assert distance(NormalizedPoint(0.0, 0.0), Centroid(0.3, 0.4, 0)) == pytest.approx(0.5)


def test_initialize_draws_distinct_points_in_index_order(square_points):
    centroids = initialize_centroids(square_points, 3, np.random.default_rng(7))
    assert [c.cluster for c in centroids] == [0, 1, 2]
    positions = {(c.x, c.y) for c in centroids}
    assert len(positions) == 3
    assert positions <= {(p.x, p.y) for p in square_points}


def test_initialize_is_reproducible_with_seed(square_points):
    first = initialize_centroids(square_points, 2, np.random.default_rng(42))
    second = initialize_centroids(square_points, 2, np.random.default_rng(42))
    assert first == second


def test_initialize_requires_enough_points(square_points):
    with pytest.raises(InsufficientData):
        initialize_centroids(square_points, 5, np.random.default_rng(0))


def test_assign_is_pure_and_repeatable(square_points):
    centroids = [Centroid(0.0, 0.0, 0), Centroid(1.0, 1.0, 1)]
    before = list(centroids)
    first = assign_clusters(square_points, centroids)
    second = assign_clusters(square_points, centroids)
    assert [p.cluster for p in first] == [0, 0, 1, 1]
    assert first == second
    assert centroids == before
    assert all(p.cluster is None for p in square_points)


def test_assign_breaks_ties_towards_lowest_index():
    points = [NormalizedPoint(0.5, 0.5)]
    centroids = [Centroid(0.0, 0.5, 0), Centroid(1.0, 0.5, 1)]
    assert assign_clusters(points, centroids)[0].cluster == 0


def test_update_moves_centroids_to_group_means(square_points):
    centroids = [Centroid(0.0, 0.0, 0), Centroid(1.0, 1.0, 1)]
    assigned = assign_clusters(square_points, centroids)
    updated = update_centroids(assigned, centroids)
    assert [c.cluster for c in updated] == [0, 1]
    assert (updated[0].x, updated[0].y) == pytest.approx((0.05, 0.05))
    assert (updated[1].x, updated[1].y) == pytest.approx((0.95, 0.95))


def test_update_leaves_empty_cluster_in_place(square_points):
    far_away = Centroid(5.0, 5.0, 1)
    centroids = [Centroid(0.5, 0.5, 0), far_away]
    assigned = assign_clusters(square_points, centroids)
    assert all(p.cluster == 0 for p in assigned)
    updated = update_centroids(assigned, centroids)
    assert updated[1] == far_away
    assert (updated[0].x, updated[0].y) == pytest.approx((0.5, 0.5))


def test_centroids_at_true_means_converge_immediately(square_points):
    centroids = [Centroid(0.05, 0.05, 0), Centroid(0.95, 0.95, 1)]
    assigned = assign_clusters(square_points, centroids)
    updated = update_centroids(assigned, centroids)
    change = calculate_centroid_change(centroids, updated)
    assert change == pytest.approx(0.0, abs=1e-12)
    assert has_converged(change, 0.001)


def test_change_is_largest_single_move():
    old = [Centroid(0.0, 0.0, 0), Centroid(1.0, 1.0, 1)]
    new = [Centroid(0.3, 0.4, 0), Centroid(1.0, 0.9, 1)]
    assert calculate_centroid_change(old, new) == pytest.approx(0.5)


def test_change_rejects_mismatched_sets():
    with pytest.raises(ValueError):
        calculate_centroid_change([Centroid(0, 0, 0)], [])
