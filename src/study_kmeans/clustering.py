"""Assignment, update and convergence helpers for K-Means."""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .errors import InsufficientData
from .models import Centroid, NormalizedPoint


def _coords(items: Sequence[NormalizedPoint] | Sequence[Centroid]) -> np.ndarray:
    return np.array([[item.x, item.y] for item in items], dtype=np.float64).reshape(
        -1, 2
    )


def distance(a: NormalizedPoint | Centroid, b: NormalizedPoint | Centroid) -> float:
    """Euclidean distance between two positions in normalized space."""
    return float(np.hypot(a.x - b.x, a.y - b.y))


def initialize_centroids(
    points: Sequence[NormalizedPoint],
    k: int,
    rng: Optional[np.random.Generator] = None,
) -> List[Centroid]:
    """Shuffle the points and seed one centroid from each of the first k."""
    if len(points) < k:
        raise InsufficientData(
            f"Need at least {k} points to seed {k} centroids, got {len(points)}"
        )
    rng = rng if rng is not None else np.random.default_rng()
    order = rng.permutation(len(points))
    return [
        Centroid(x=points[idx].x, y=points[idx].y, cluster=i)
        for i, idx in enumerate(order[:k])
    ]


def assign_clusters(
    points: Sequence[NormalizedPoint], centroids: Sequence[Centroid]
) -> List[NormalizedPoint]:
    """Label every point with the index of its nearest centroid.

    Ties go to the lowest centroid index. Returns new points; neither input
    is modified.
    """
    if not points:
        return []
    features = _coords(points)
    centres = _coords(centroids)
    distances = np.linalg.norm(features[:, None, :] - centres[None, :, :], axis=2)
    nearest = distances.argmin(axis=1)
    return [
        NormalizedPoint(x=point.x, y=point.y, cluster=centroids[int(idx)].cluster)
        for point, idx in zip(points, nearest)
    ]


def update_centroids(
    points: Sequence[NormalizedPoint], old_centroids: Sequence[Centroid]
) -> List[Centroid]:
    """Move each centroid to the mean of its members.

    A centroid with no members keeps its previous position.
    """
    features = _coords(points)
    labels = np.array(
        [-1 if p.cluster is None else p.cluster for p in points], dtype=np.int64
    )
    updated: List[Centroid] = []
    for centroid in old_centroids:
        members = features[labels == centroid.cluster]
        if not members.size:
            updated.append(centroid)
            continue
        mean_x, mean_y = members.mean(axis=0)
        updated.append(
            Centroid(x=float(mean_x), y=float(mean_y), cluster=centroid.cluster)
        )
    return updated


def calculate_centroid_change(
    old: Sequence[Centroid], new: Sequence[Centroid]
) -> float:
    """Largest distance any centroid moved between two centroid sets."""
    if len(old) != len(new):
        raise ValueError(
            f"Centroid sets differ in size: {len(old)} vs {len(new)}"
        )
    if not old:
        return 0.0
    return float(np.linalg.norm(_coords(old) - _coords(new), axis=1).max())


def has_converged(change: float, threshold: float) -> bool:
    return change < threshold
