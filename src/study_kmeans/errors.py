"""Exceptions raised by the loader, normalizer and clustering engine."""
from __future__ import annotations


class ClusteringError(Exception):
    """Base class for all rejections raised by this package."""


class DataLoadFailure(ClusteringError):
    """The dataset could not be read or parsed."""


class DegenerateDataset(ClusteringError, ValueError):
    """A feature column has a non-positive maximum and cannot be scaled."""


class InsufficientData(ClusteringError, ValueError):
    """The dataset holds fewer points than the requested cluster count."""


class InvalidK(ClusteringError, ValueError):
    """K is outside the accepted range or was changed during a run."""


class RunAlreadyActive(ClusteringError, RuntimeError):
    """A run was started while another one is still running."""
