"""Summaries of clustering snapshots."""
from __future__ import annotations

from typing import Any, Dict

from .models import Snapshot
from .normalize import denormalize


def summarize_snapshot(snapshot: Snapshot) -> Dict[str, Any]:
    """Create a JSON-serializable report for a snapshot."""
    sizes = {centroid.cluster: 0 for centroid in snapshot.centroids}
    unlabeled = 0
    for point in snapshot.points:
        if point.cluster is None:
            unlabeled += 1
        else:
            sizes[point.cluster] = sizes.get(point.cluster, 0) + 1

    clusters = []
    for centroid in snapshot.centroids:
        entry: Dict[str, Any] = {
            "cluster": centroid.cluster,
            "size": sizes.get(centroid.cluster, 0),
            "centroid": {"x": centroid.x, "y": centroid.y},
        }
        if snapshot.feature_max is not None:
            study, sleep = denormalize(centroid, snapshot.feature_max)
            entry["centroid_hours"] = {"study": study, "sleep": sleep}
        clusters.append(entry)

    return {
        "status": snapshot.status.value,
        "k": snapshot.k,
        "iteration": snapshot.iteration,
        "displacement": snapshot.displacement,
        "point_count": len(snapshot.points),
        "unlabeled": unlabeled,
        "clusters": clusters,
    }
