# farmdatalogic/utils.py
from __future__ import annotations
import re
import numpy as np
import pandas as pd
from typing import Optional, Sequence, Type, TypeVar, cast

from . import canon
from .types import CanonFrame, Granularity, IntervalSeries, FilteredSeries

S = TypeVar("S", bound=IntervalSeries)

_WALL_CLOCK = re.compile(canon.WALL_CLOCK_PATTERN)


def parse_timestamps(timestamps: Sequence[str]) -> pd.DatetimeIndex:
    """
    Parse ISO-8601 strings into a naive wall-clock DatetimeIndex.

    Only the 'YYYY-MM-DD[THH:MM[:SS]]' part is read, so offsets are ignored
    rather than converted and mixed offset/plain input parses alike.
    Unparseable entries become NaT.
    """
    s = pd.Series(list(timestamps), dtype="object").astype(str)
    wall = s.str.extract(canon.WALL_CLOCK_PATTERN, expand=False)
    parsed = pd.to_datetime(wall, format="ISO8601", errors="coerce")
    return pd.DatetimeIndex(parsed, name=canon.INDEX_NAME)


def _parse_one(ts) -> Optional[pd.Timestamp]:
    m = _WALL_CLOCK.match(str(ts))
    if m is None:
        return None
    out = pd.to_datetime(m.group(1), format="ISO8601", errors="coerce")
    return None if pd.isna(out) else pd.Timestamp(out)


def hour_key(ts: str) -> str:
    """Truncate to the hour: 'YYYY-MM-DDTHH:00'."""
    t = _parse_one(ts)
    if t is None:
        return str(ts)[: canon.HOUR_KEY_LEN] + ":00"
    return t.strftime(canon.HOUR_KEY_FORMAT)


def day_key(ts: str) -> str:
    t = _parse_one(ts)
    if t is None:
        return str(ts)[: canon.DAY_KEY_LEN]
    return t.strftime(canon.DAY_KEY_FORMAT)


def month_key(ts: str) -> str:
    t = _parse_one(ts)
    if t is None:
        return str(ts)[: canon.MONTH_KEY_LEN]
    return t.strftime(canon.MONTH_KEY_FORMAT)


def hour_keys(idx: pd.DatetimeIndex) -> pd.Index:
    return pd.Index(idx.strftime(canon.HOUR_KEY_FORMAT))


def day_keys(idx: pd.DatetimeIndex) -> pd.Index:
    return pd.Index(idx.strftime(canon.DAY_KEY_FORMAT))


def month_keys(idx: pd.DatetimeIndex) -> pd.Index:
    return pd.Index(idx.strftime(canon.MONTH_KEY_FORMAT))


def bucket_keys(idx: pd.DatetimeIndex, granularity: Granularity) -> pd.Index:
    """
    Vectorised bucket keys for a parsed index. NaT rows map to NaN and are
    dropped by any later groupby.
    """
    if granularity == "hourly":
        return hour_keys(idx)
    if granularity == "daily":
        return day_keys(idx)
    raise ValueError(f"No bucket key for granularity '{granularity}'")


def days_between(first: str, last: str) -> float:
    """Elapsed (fractional) days between two timestamps; NaN if either is unparseable."""
    a, b = _parse_one(first), _parse_one(last)
    if a is None or b is None:
        return float("nan")
    return float((b - a) / pd.Timedelta(days=1))


def weekend_dates(timestamps: Sequence[str]) -> list[str]:
    """Distinct Saturday/Sunday day keys present in the timestamps, ascending."""
    idx = parse_timestamps(timestamps).dropna().normalize().unique()
    dow = np.asarray(idx.dayofweek)  # Mon=0..Sun=6
    weekends = pd.DatetimeIndex(idx[dow >= 5]).sort_values()
    return list(weekends.strftime(canon.DAY_KEY_FORMAT))


def build_canon_frame(series: IntervalSeries) -> CanonFrame:
    """Frame view of a series: parsed index, input strings kept in 'ts'."""
    idx = parse_timestamps(series.timestamps)
    df = pd.DataFrame(
        {
            "ts": list(series.timestamps),
            "mw": np.asarray(series.values, dtype=float),
            "duration_h": np.asarray(series.durations, dtype=float),
        },
        index=idx,
    )
    df.__class__ = CanonFrame
    return cast(CanonFrame, df)


def series_from_frame(df: pd.DataFrame, cls: Type[S] = FilteredSeries) -> S:  # type: ignore[assignment]
    return cls(
        timestamps=[str(t) for t in df["ts"]],
        values=df["mw"].astype(float).tolist(),
        durations=df["duration_h"].astype(float).tolist(),
    )


def infer_cadence_minutes(
    idx: pd.DatetimeIndex, default: int = canon.DEFAULT_CADENCE_MIN
) -> int:
    """
    Infer cadence in minutes from a DatetimeIndex, ignoring duplicates and NaT.
    """
    ts = pd.DatetimeIndex(idx).dropna().sort_values().unique()
    if len(ts) < 2:
        return int(default)

    diffs = ts[1:] - ts[:-1]
    diffs_min = (diffs / np.timedelta64(1, "s")).to_numpy(dtype=float) / 60.0
    diffs_min = diffs_min[diffs_min > 0]
    if len(diffs_min) == 0:
        return int(default)

    rounded = np.rint(diffs_min).astype(int)
    vals, counts = np.unique(rounded, return_counts=True)
    return int(vals[np.argmax(counts)])
