from __future__ import annotations

import pytest

from study_kmeans.config import EngineConfig
from study_kmeans.engine import ClusteringEngine
from study_kmeans.visuals import PALETTE, build_figure, cluster_color


def test_idle_figure_shows_unlabeled_points_only(spread_points):
    engine = ClusteringEngine(spread_points, config=EngineConfig(k=3))
    fig = build_figure(engine.snapshot())
    assert [trace.name for trace in fig.data] == ["unlabeled"]
    assert len(fig.data[0].x) == len(spread_points)
    assert list(fig.layout.xaxis.range) == [0.0, 40.0]
    assert list(fig.layout.yaxis.range) == [0.0, 12.0]


def test_centroids_drawn_in_raw_hours(duplicate_pairs):
    engine = ClusteringEngine(duplicate_pairs, config=EngineConfig(k=2, seed=4))
    engine.start()
    snapshot = engine.run_to_convergence()
    fig = build_figure(snapshot, title="done")
    names = [trace.name for trace in fig.data]
    assert names[-1] == "centroids"
    assert "unlabeled" not in names
    centroids = fig.data[-1]
    positions = sorted(zip(centroids.x, centroids.y))
    assert positions[0] == pytest.approx((10.0, 4.0))
    assert positions[1] == pytest.approx((30.0, 9.0))
    assert fig.layout.title.text == "done"


def test_palette_wraps():
    assert cluster_color(0) == PALETTE[0]
    assert cluster_color(len(PALETTE)) == PALETTE[0]
