"""Iterative K-Means clustering of study hours versus sleep hours."""

__all__ = [
    "clustering",
    "config",
    "constants",
    "driver",
    "engine",
    "errors",
    "loader",
    "models",
    "normalize",
    "reports",
    "visuals",
]
__version__ = "0.1.0"
