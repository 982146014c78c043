from __future__ import annotations

import json

import pytest

from study_kmeans.config import EngineConfig
from study_kmeans.engine import ClusteringEngine
from study_kmeans.reports import summarize_snapshot


def test_summary_of_idle_engine(spread_points):
    engine = ClusteringEngine(spread_points, config=EngineConfig(k=3))
    summary = summarize_snapshot(engine.snapshot())
    assert summary["status"] == "idle"
    assert summary["clusters"] == []
    assert summary["unlabeled"] == len(spread_points)
    assert summary["displacement"] is None


def test_summary_of_converged_run(duplicate_pairs):
    engine = ClusteringEngine(duplicate_pairs, config=EngineConfig(k=2, seed=1))
    engine.start()
    summary = summarize_snapshot(engine.run_to_convergence())
    assert summary["status"] == "converged"
    assert summary["point_count"] == 4
    assert summary["unlabeled"] == 0
    assert sorted(c["size"] for c in summary["clusters"]) == [2, 2]
    hours = sorted(
        (c["centroid_hours"]["study"], c["centroid_hours"]["sleep"])
        for c in summary["clusters"]
    )
    assert hours[0] == pytest.approx((10.0, 4.0))
    assert hours[1] == pytest.approx((30.0, 9.0))
    json.dumps(summary)
