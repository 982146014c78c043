"""Streamlit dashboard animating K-Means convergence."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import streamlit as st

from study_kmeans.config import DashboardConfig, EngineConfig
from study_kmeans.constants import DEFAULT_K, MAX_K, MIN_K
from study_kmeans.driver import iter_steps
from study_kmeans.engine import ClusteringEngine
from study_kmeans.errors import DataLoadFailure
from study_kmeans.loader import load_dataset
from study_kmeans.models import RawPoint, Snapshot
from study_kmeans.visuals import build_figure


def _parse_args() -> argparse.Namespace:
    """Parse optional CLI args passed after `--` in streamlit."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--data",
        default=str(DashboardConfig.data_path),
        help="CSV dataset with study and sleep columns.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DashboardConfig.step_interval,
        help="Seconds between iterations.",
    )
    args, _ = parser.parse_known_args()
    return args


@st.cache_data
def _load_points(path: str) -> List[RawPoint]:
    config = DashboardConfig(data_path=Path(path))
    return load_dataset(
        config.data_path,
        study_column=config.study_column,
        sleep_column=config.sleep_column,
    )


def _button_label(snapshot: Snapshot, max_iterations: int) -> str:
    if snapshot.is_running:
        return f"Iterating... ({snapshot.iteration}/{max_iterations})"
    return "Start clustering"


def _engine(points: List[RawPoint]) -> ClusteringEngine:
    """Return the session engine, creating it on first use."""
    engine = st.session_state.get("engine")
    if engine is None:
        engine = ClusteringEngine(points, config=EngineConfig(k=DEFAULT_K))
        st.session_state["engine"] = engine
    return engine


def _draw(chart, snapshot: Snapshot) -> None:
    chart.plotly_chart(
        build_figure(snapshot), width="stretch", key=f"chart-{snapshot.generation}"
    )


def _show_running(k_slot, button_slot, snapshot: Snapshot, max_iterations: int) -> None:
    """Swap the controls for disabled copies labelled with the progress."""
    k_slot.number_input(
        "Number of clusters (K)",
        min_value=MIN_K,
        max_value=MAX_K,
        value=snapshot.k,
        step=1,
        disabled=True,
        key=f"k-running-{snapshot.generation}",
    )
    button_slot.button(
        _button_label(snapshot, max_iterations),
        disabled=True,
        key=f"start-running-{snapshot.generation}",
    )


def main() -> None:
    """Entry point for Streamlit app."""
    st.set_page_config(page_title="K-Means Clustering Demo", layout="centered")
    st.title("K-Means Clustering Demo")

    args = _parse_args()
    data_path = st.sidebar.text_input("Dataset CSV", args.data)
    interval = st.sidebar.slider(
        "Seconds per iteration", 0.0, 2.0, float(args.interval), 0.1
    )

    try:
        points = _load_points(data_path)
    except DataLoadFailure as exc:
        st.error(str(exc))
        return

    engine = _engine(points)
    max_iterations = engine.config.max_iterations
    # A rerun interrupts any animation loop; the run cannot resume.
    snapshot = engine.stop()

    k_slot = st.empty()
    button_slot = st.empty()
    k = k_slot.number_input(
        "Number of clusters (K)",
        min_value=MIN_K,
        max_value=MAX_K,
        value=engine.k,
        step=1,
    )
    start = button_slot.button(_button_label(snapshot, max_iterations))
    chart = st.empty()
    status = st.empty()
    _draw(chart, snapshot)

    if not start:
        if snapshot.status.is_terminal:
            status.info(
                f"Finished: {snapshot.status.value} "
                f"after {snapshot.iteration} iterations"
            )
        return

    engine.set_k(int(k))
    engine.load(points)
    snapshot = engine.start()
    _show_running(k_slot, button_slot, snapshot, max_iterations)
    _draw(chart, snapshot)
    for snapshot in iter_steps(engine, interval=interval):
        if snapshot.is_running:
            _show_running(k_slot, button_slot, snapshot, max_iterations)
        _draw(chart, snapshot)
        status.write(f"Iteration {snapshot.iteration}/{max_iterations}")
    # Redraw with enabled controls and the final status.
    st.rerun()


if __name__ == "__main__":
    main()
