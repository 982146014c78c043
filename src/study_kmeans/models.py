"""Data model shared by the normalizer, engine and renderers."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawPoint:
    """A record as loaded: weekly study hours, nightly sleep hours, label."""

    study_hours: float
    sleep_hours: float
    cluster: Optional[int] = None


@dataclass(frozen=True)
class NormalizedPoint:
    """A record scaled into the unit square."""

    x: float
    y: float
    cluster: Optional[int] = None


@dataclass(frozen=True)
class Centroid:
    """Cluster centre in normalized coordinates."""

    x: float
    y: float
    cluster: int


class RunStatus(str, Enum):
    """Lifecycle of a clustering run."""

    IDLE = "idle"
    RUNNING = "running"
    CONVERGED = "converged"
    ITERATION_CAP_REACHED = "iteration_cap_reached"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.CONVERGED, RunStatus.ITERATION_CAP_REACHED)


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs after one committed step."""

    points: Tuple[RawPoint, ...]
    normalized: Tuple[NormalizedPoint, ...]
    centroids: Tuple[Centroid, ...]
    iteration: int
    status: RunStatus
    k: int
    generation: int = 0
    displacement: Optional[float] = None
    feature_max: Optional[Tuple[float, float]] = None

    @property
    def is_running(self) -> bool:
        return self.status is RunStatus.RUNNING

    @property
    def converged(self) -> bool:
        return self.status is RunStatus.CONVERGED
