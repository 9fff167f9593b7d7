from __future__ import annotations
import numpy as np
import pandas as pd
from typing import cast

from . import canon, exceptions
from .types import IntervalSeries


def assert_series(series: IntervalSeries, name: str = "series") -> None:
    """Check a series through its canonical frame; errors are prefixed with name."""
    try:
        assert_canon(series.to_frame())
    except exceptions.IngestError as e:
        raise exceptions.IngestError(f"{name}: {e}") from e


def assert_canon(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.IngestError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.IngestError("Index must be a DatetimeIndex.")
    idx = cast(pd.DatetimeIndex, df.index)
    if idx.tz is not None:
        raise exceptions.IngestError("Index must be naive wall-clock time.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.IngestError(f"Missing required column '{col}'.")
    if not idx.dropna().is_monotonic_increasing:
        raise exceptions.IngestError("Timestamps must be sorted ascending.")
    d = df["duration_h"].to_numpy(dtype=float)
    if len(d) and not (np.isfinite(d) & (d > 0)).all():
        raise exceptions.IngestError(
            "Durations must be strictly positive; energy cannot be integrated."
        )
