"""Configuration models for the clustering engine and dashboard."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import (
    CONVERGENCE_THRESHOLD,
    DEFAULT_K,
    MAX_ITERATIONS,
    SLEEP_HOURS_COLUMN,
    STEP_INTERVAL_SECONDS,
    STUDY_HOURS_COLUMN,
)


@dataclass
class EngineConfig:
    """Run settings for a clustering engine."""

    k: int = DEFAULT_K
    max_iterations: int = MAX_ITERATIONS
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    seed: Optional[int] = None


@dataclass
class DashboardConfig:
    """Settings for the interactive dashboard."""

    data_path: Path = Path("data/data.csv")
    step_interval: float = STEP_INTERVAL_SECONDS
    study_column: str = STUDY_HOURS_COLUMN
    sleep_column: str = SLEEP_HOURS_COLUMN
