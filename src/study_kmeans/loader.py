"""CSV loading for study/sleep records."""
from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from .constants import SLEEP_HOURS_COLUMN, STUDY_HOURS_COLUMN
from .errors import DataLoadFailure
from .models import RawPoint

LOAD_FAILURE_MESSAGE = "Failed to load data"


def points_from_frame(
    frame: pd.DataFrame,
    study_column: str = STUDY_HOURS_COLUMN,
    sleep_column: str = SLEEP_HOURS_COLUMN,
) -> List[RawPoint]:
    """Convert a DataFrame with the two feature columns into raw points."""
    missing = [c for c in (study_column, sleep_column) if c not in frame.columns]
    if missing:
        raise DataLoadFailure(
            f"{LOAD_FAILURE_MESSAGE}: missing columns {', '.join(missing)}"
        )
    if frame.empty:
        raise DataLoadFailure(f"{LOAD_FAILURE_MESSAGE}: no rows")

    values = frame[[study_column, sleep_column]].apply(
        pd.to_numeric, errors="coerce"
    )
    if values.isna().any().any():
        bad_rows = values.index[values.isna().any(axis=1)].tolist()
        raise DataLoadFailure(
            f"{LOAD_FAILURE_MESSAGE}: non-numeric values in rows {bad_rows[:5]}"
        )
    if (values < 0).any().any():
        raise DataLoadFailure(f"{LOAD_FAILURE_MESSAGE}: negative values")

    return [
        RawPoint(study_hours=float(study), sleep_hours=float(sleep))
        for study, sleep in values.itertuples(index=False, name=None)
    ]


def load_dataset(
    path: str | Path,
    study_column: str = STUDY_HOURS_COLUMN,
    sleep_column: str = SLEEP_HOURS_COLUMN,
) -> List[RawPoint]:
    """Read a CSV file with a header row into raw points."""
    path = Path(path)
    if not path.exists():
        raise DataLoadFailure(f"{LOAD_FAILURE_MESSAGE}: {path} not found")
    try:
        frame = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadFailure(f"{LOAD_FAILURE_MESSAGE}: {exc}") from exc
    return points_from_frame(frame, study_column, sleep_column)
