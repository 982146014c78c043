"""Step-driven K-Means engine with an explicit run state machine."""
from __future__ import annotations

import threading
from dataclasses import replace
from numbers import Integral
from typing import Callable, Iterable, List, Optional

import numpy as np

from .clustering import (
    assign_clusters,
    calculate_centroid_change,
    has_converged,
    initialize_centroids,
    update_centroids,
)
from .config import EngineConfig
from .constants import MAX_K, MIN_K
from .errors import InsufficientData, InvalidK, RunAlreadyActive
from .models import NormalizedPoint, RawPoint, RunStatus, Snapshot
from .normalize import feature_maxima, normalize

SnapshotCallback = Callable[[Snapshot], None]


def validate_k(value: object) -> int:
    """Return ``value`` as an int if it is an accepted cluster count."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidK(f"K must be an integer, got {value!r}")
    if not MIN_K <= value <= MAX_K:
        raise InvalidK(f"K must be between {MIN_K} and {MAX_K}, got {value}")
    return int(value)


class ClusteringEngine:
    """Own the dataset, centroids and labels of a single clustering run.

    The engine never schedules itself. An external driver calls ``step()``
    on whatever cadence it likes; each call sees the state committed by the
    previous one, and every commit swaps in a complete ``Snapshot`` under a
    lock so readers never observe labels without their matching centroids.
    """

    def __init__(
        self,
        points: Optional[Iterable[RawPoint]] = None,
        config: Optional[EngineConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """Initialize an idle engine, optionally with a dataset."""
        self.config = config or EngineConfig()
        validate_k(self.config.k)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._lock = threading.RLock()
        self._subscribers: List[SnapshotCallback] = []
        self._state = Snapshot(
            points=tuple(replace(p, cluster=None) for p in points or ()),
            normalized=(),
            centroids=(),
            iteration=0,
            status=RunStatus.IDLE,
            k=self.config.k,
        )

    @property
    def k(self) -> int:
        return self._state.k

    @property
    def status(self) -> RunStatus:
        return self._state.status

    @property
    def is_running(self) -> bool:
        return self._state.status is RunStatus.RUNNING

    def snapshot(self) -> Snapshot:
        """Return the last committed snapshot."""
        with self._lock:
            return self._state

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a callback for every commit; returns an unsubscribe hook.

        Callbacks run under the engine lock and should not raise. An error from
        one is re-raised after the commit and after the other subscribers ran.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def load(self, points: Iterable[RawPoint]) -> Snapshot:
        """Replace the dataset. Only allowed while no run is active."""
        with self._lock:
            if self.is_running:
                raise RunAlreadyActive("Cannot load a dataset during a run")
            return self._commit(
                points=tuple(replace(p, cluster=None) for p in points),
                normalized=(),
                centroids=(),
                iteration=0,
                status=RunStatus.IDLE,
                displacement=None,
                feature_max=None,
            )

    def set_k(self, value: object) -> int:
        """Change the cluster count for the next run."""
        with self._lock:
            if self.is_running:
                raise InvalidK("K cannot change while a run is active")
            k = validate_k(value)
            if k != self._state.k:
                self._commit(k=k)
            return k

    def start(self) -> Snapshot:
        """Normalize, seed centroids and make the initial assignment.

        Every precondition is checked before any state changes, so a
        rejected start leaves the previous snapshot untouched.
        """
        with self._lock:
            if self.is_running:
                raise RunAlreadyActive("A clustering run is already active")
            raw = self._state.points
            k = self._state.k
            if len(raw) < k:
                raise InsufficientData(
                    f"Need at least {k} points for K={k}, got {len(raw)}"
                )
            maxima = feature_maxima(raw)
            normalized = normalize(raw)
            centroids = initialize_centroids(normalized, k, self.rng)
            assigned = assign_clusters(normalized, centroids)
            return self._commit(
                points=self._label_raw(raw, assigned),
                normalized=tuple(assigned),
                centroids=tuple(centroids),
                iteration=0,
                status=RunStatus.RUNNING,
                displacement=None,
                feature_max=maxima,
            )

    def step(self) -> Snapshot:
        """Advance one iteration and return the committed snapshot.

        Calling this while not running returns the current snapshot as is.
        """
        with self._lock:
            state = self._state
            if state.status is not RunStatus.RUNNING:
                return state

            assigned = assign_clusters(state.normalized, state.centroids)
            new_centroids = update_centroids(assigned, state.centroids)
            change = calculate_centroid_change(state.centroids, new_centroids)

            if has_converged(change, self.config.convergence_threshold):
                # Centroids stay put; labels are refreshed against them.
                return self._commit(
                    points=self._label_raw(state.points, assigned),
                    normalized=tuple(assigned),
                    status=RunStatus.CONVERGED,
                    displacement=change,
                )

            iteration = state.iteration + 1
            status = RunStatus.RUNNING
            if iteration >= self.config.max_iterations:
                status = RunStatus.ITERATION_CAP_REACHED
            return self._commit(
                points=self._label_raw(state.points, assigned),
                normalized=tuple(assigned),
                centroids=tuple(new_centroids),
                iteration=iteration,
                status=status,
                displacement=change,
            )

    def stop(self) -> Snapshot:
        """Cancel an active run, keeping the last committed labels."""
        with self._lock:
            if not self.is_running:
                return self._state
            return self._commit(status=RunStatus.IDLE)

    def run_to_convergence(self, max_steps: Optional[int] = None) -> Snapshot:
        """Step without delay until the run ends or ``max_steps`` is hit."""
        steps = 0
        snapshot = self.snapshot()
        while snapshot.is_running:
            if max_steps is not None and steps >= max_steps:
                break
            snapshot = self.step()
            steps += 1
        return snapshot

    @staticmethod
    def _label_raw(
        raw: Iterable[RawPoint], assigned: Iterable[NormalizedPoint]
    ) -> tuple:
        raw = tuple(raw)
        assigned = tuple(assigned)
        if len(raw) != len(assigned):
            raise ValueError(
                f"Raw and normalized datasets differ: {len(raw)} vs {len(assigned)}"
            )
        return tuple(
            replace(point, cluster=norm.cluster) for point, norm in zip(raw, assigned)
        )

    def _commit(self, **changes) -> Snapshot:
        """Swap in a new snapshot and notify subscribers in commit order.

        The commit is final before any callback runs. Every subscriber is
        notified even if an earlier one raises; the first error is then
        re-raised to the caller, and ``snapshot()`` already reflects the commit.
        """
        self._state = replace(
            self._state, generation=self._state.generation + 1, **changes
        )
        error: Optional[BaseException] = None
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception as exc:
                if error is None:
                    error = exc
        if error is not None:
            raise error
        return self._state
