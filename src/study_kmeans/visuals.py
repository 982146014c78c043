"""Plotly rendering of clustering snapshots."""
from __future__ import annotations

from typing import Dict, List

import plotly.express as px
import plotly.graph_objects as go

from .constants import SLEEP_HOURS_DOMAIN, STUDY_HOURS_DOMAIN
from .models import RawPoint, Snapshot
from .normalize import denormalize

PALETTE: List[str] = px.colors.qualitative.D3
UNLABELED_COLOR = "#000000"


def cluster_color(cluster: int) -> str:
    """Return the palette colour for a cluster index."""
    return PALETTE[cluster % len(PALETTE)]


def _group_points(points: List[RawPoint]) -> Dict[int | None, List[RawPoint]]:
    groups: Dict[int | None, List[RawPoint]] = {}
    for point in points:
        groups.setdefault(point.cluster, []).append(point)
    return groups


def build_figure(snapshot: Snapshot, title: str | None = None) -> go.Figure:
    """Draw labelled points in raw hours with centroids on top."""
    fig = go.Figure()
    groups = _group_points(list(snapshot.points))

    unlabeled = groups.pop(None, [])
    if unlabeled:
        fig.add_trace(
            go.Scatter(
                x=[p.study_hours for p in unlabeled],
                y=[p.sleep_hours for p in unlabeled],
                mode="markers",
                name="unlabeled",
                marker={
                    "size": 5,
                    "color": "rgba(0,0,0,0)",
                    "line": {"color": UNLABELED_COLOR, "width": 1.5},
                },
            )
        )

    for cluster in sorted(groups):
        members = groups[cluster]
        color = cluster_color(cluster)
        fig.add_trace(
            go.Scatter(
                x=[p.study_hours for p in members],
                y=[p.sleep_hours for p in members],
                mode="markers",
                name=f"cluster {cluster}",
                marker={"size": 5, "color": color, "line": {"color": color, "width": 1.5}},
            )
        )

    if snapshot.centroids and snapshot.feature_max is not None:
        positions = [denormalize(c, snapshot.feature_max) for c in snapshot.centroids]
        fig.add_trace(
            go.Scatter(
                x=[pos[0] for pos in positions],
                y=[pos[1] for pos in positions],
                mode="markers",
                name="centroids",
                marker={
                    "size": 12,
                    "color": [cluster_color(c.cluster) for c in snapshot.centroids],
                    "opacity": 0.7,
                    "line": {"color": "#000000", "width": 2},
                },
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Weekly study hours",
        yaxis_title="Nightly sleep hours",
        xaxis={"range": list(STUDY_HOURS_DOMAIN)},
        yaxis={"range": list(SLEEP_HOURS_DOMAIN)},
        showlegend=True,
    )
    return fig
