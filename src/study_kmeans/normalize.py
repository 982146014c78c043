"""Zero-floor min-max scaling of the two features."""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .errors import DegenerateDataset, InsufficientData
from .models import Centroid, NormalizedPoint, RawPoint


def _raw_features(points: Sequence[RawPoint]) -> np.ndarray:
    return np.array(
        [[p.study_hours, p.sleep_hours] for p in points], dtype=np.float64
    ).reshape(-1, 2)


def feature_maxima(points: Sequence[RawPoint]) -> Tuple[float, float]:
    """Return the per-feature maxima, rejecting columns that cannot scale."""
    if len(points) == 0:
        raise InsufficientData("Cannot normalize an empty dataset")
    maxima = _raw_features(points).max(axis=0)
    for name, value in zip(("study hours", "sleep hours"), maxima):
        if not np.isfinite(value) or value <= 0:
            raise DegenerateDataset(
                f"Maximum {name} is {value}; the column cannot be scaled"
            )
    return float(maxima[0]), float(maxima[1])


def normalize(points: Sequence[RawPoint]) -> List[NormalizedPoint]:
    """Divide each feature by its dataset-wide maximum.

    Output order matches input order. Labels are not carried over; a fresh
    run assigns them.
    """
    max_study, max_sleep = feature_maxima(points)
    scaled = _raw_features(points) / np.array([max_study, max_sleep])
    return [NormalizedPoint(x=float(x), y=float(y)) for x, y in scaled]


def denormalize(
    centroid: Centroid, feature_max: Tuple[float, float]
) -> Tuple[float, float]:
    """Map a centroid back to raw study/sleep hours."""
    return centroid.x * feature_max[0], centroid.y * feature_max[1]
