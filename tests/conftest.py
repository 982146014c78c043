"""Shared datasets for the clustering tests."""
from __future__ import annotations

from typing import List

import pytest

from study_kmeans.models import RawPoint


@pytest.fixture
def duplicate_pairs() -> List[RawPoint]:
    """Two tight pairs that normalize to (1/3, 4/9) and (1, 1)."""
    return [
        RawPoint(10, 4),
        RawPoint(10, 4),
        RawPoint(30, 9),
        RawPoint(30, 9),
    ]


@pytest.fixture
def spread_points() -> List[RawPoint]:
    """A dozen points in three loose groups."""
    return [
        RawPoint(10, 4),
        RawPoint(12, 5),
        RawPoint(11, 4.5),
        RawPoint(30, 9),
        RawPoint(28, 8.5),
        RawPoint(31, 9),
        RawPoint(20, 7),
        RawPoint(22, 6.5),
        RawPoint(5, 10),
        RawPoint(6, 11),
        RawPoint(35, 5),
        RawPoint(33, 4.5),
    ]
