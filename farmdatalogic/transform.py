from __future__ import annotations
import math
import numpy as np
import pandas as pd
from typing import Mapping, Sequence, get_args

from . import exceptions, utils
from .types import (
    AggregatedSeries,
    DailyEnergy,
    DateRange,
    FilteredSeries,
    Granularity,
    Heatmap,
    IntervalSeries,
)


def as_date_range(date_range: DateRange | Mapping[str, str]) -> DateRange:
    if isinstance(date_range, DateRange):
        return date_range
    return DateRange.model_validate(date_range)


def range_mask(idx: pd.DatetimeIndex, date_range: DateRange) -> np.ndarray:
    """True where the calendar date of idx lies in [start, end]; NaT never matches."""
    start = pd.Timestamp(date_range.start)
    stop = pd.Timestamp(date_range.end) + pd.Timedelta(days=1)
    return np.asarray((idx >= start) & (idx < stop), dtype=bool)


def filter_range(
    series: IntervalSeries, date_range: DateRange | Mapping[str, str]
) -> FilteredSeries:
    """
    Keep every sample whose date falls in the inclusive range, order preserved.
    A range that selects nothing yields an empty FilteredSeries.
    """
    dr = as_date_range(date_range)
    df = series.to_frame()
    mask = range_mask(pd.DatetimeIndex(df.index), dr)
    return FilteredSeries.from_frame(df[mask])


def aggregate(
    timestamps: Sequence[str],
    values: Sequence[float],
    granularity: Granularity,
) -> AggregatedSeries:
    """
    Resample to the given granularity.

    - 'native': identity.
    - 'hourly' / 'daily': plain arithmetic mean of the samples sharing a bucket
      key, one output sample per key, keys ascending. Buckets are not
      normalised by their expected size.
    """
    exceptions.require(
        granularity in get_args(Granularity),
        f"Unknown granularity '{granularity}'",
        exceptions.TransformError,
    )
    exceptions.require(
        len(timestamps) == len(values),
        f"timestamps/values lengths differ: {len(timestamps)}/{len(values)}",
        exceptions.TransformError,
    )
    if granularity == "native":
        return AggregatedSeries(
            timestamps=list(timestamps), values=[float(v) for v in values]
        )

    keys = utils.bucket_keys(utils.parse_timestamps(timestamps), granularity)
    s = pd.Series(np.asarray(values, dtype=float), index=keys)
    means = s.groupby(level=0, sort=True).mean()
    return AggregatedSeries(
        timestamps=[str(k) for k in means.index],
        values=means.astype(float).tolist(),
    )


def interval_energy(values: Sequence[float], durations: Sequence[float]) -> np.ndarray:
    """Per-sample energy, MW x h = MWh."""
    v = np.asarray(values, dtype=float)
    d = np.asarray(durations, dtype=float)
    exceptions.require(
        v.shape == d.shape,
        f"values/durations lengths differ: {v.shape}/{d.shape}",
        exceptions.TransformError,
    )
    return v * d


def to_energy(values: Sequence[float], durations: Sequence[float]) -> float:
    """
    Integrate a power series into energy (MWh): sum(values[i] * durations[i]).

    The sum is exactly rounded, so the result does not depend on sample order.
    """
    return math.fsum(interval_energy(values, durations).tolist())


def energy_by(
    keys: pd.Index | Sequence[str],
    values: Sequence[float],
    durations: Sequence[float],
) -> pd.Series:
    """Energy (MWh) summed per key, keys ascending. NaN keys are dropped."""
    e = pd.Series(interval_energy(values, durations))
    k = np.asarray(keys, dtype=object)
    exceptions.require(
        len(k) == len(e),
        f"keys/values lengths differ: {len(k)}/{len(e)}",
        exceptions.TransformError,
    )
    if len(e) == 0:
        return pd.Series(dtype=float)
    return e.groupby(k, sort=True).sum()


def daily_energy(series: IntervalSeries) -> DailyEnergy:
    """Energy per calendar day (MWh) for the daily bar chart."""
    df = series.to_frame()
    totals = energy_by(
        utils.day_keys(pd.DatetimeIndex(df.index)), df.mw, df.duration_h
    )
    return DailyEnergy(
        dates=[str(d) for d in totals.index], mwh=totals.astype(float).tolist()
    )


def heatmap(series: IntervalSeries) -> Heatmap:
    """
    Hour x day matrix of mean power.

    Dates are the observed days only; hours always span 00..23. A cell with no
    samples is 0.
    """
    hours = list(range(24))
    df = series.to_frame()
    idx = pd.DatetimeIndex(df.index)
    valid = ~np.asarray(idx.isna())
    if not valid.any():
        return Heatmap(dates=[], hours=hours, z=[[] for _ in hours])

    idx = idx[valid]
    mw = df.mw.to_numpy(dtype=float)[valid]
    day = utils.day_keys(idx).to_numpy(dtype=object)
    dates = sorted(set(day))

    cell = pd.Series(mw).groupby([day, np.asarray(idx.hour)]).mean()
    grid = cell.unstack(level=0).reindex(index=hours, columns=dates).fillna(0.0)
    return Heatmap(dates=dates, hours=hours, z=grid.to_numpy(dtype=float).tolist())


def compare_daily(
    dataset: Mapping[str, IntervalSeries],
    date_range: DateRange | Mapping[str, str],
) -> dict[str, DailyEnergy]:
    """
    Daily energy per farm over a shared range, in dataset order.

    Dates with no samples are absent, not zero-filled; a farm with nothing in
    range gets an empty DailyEnergy.
    """
    dr = as_date_range(date_range)
    return {name: daily_energy(filter_range(s, dr)) for name, s in dataset.items()}
