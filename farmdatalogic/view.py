from __future__ import annotations
import pandas as pd
from datetime import date, timedelta
from typing import Mapping, Optional, get_args

from . import canon, exceptions, utils
from .types import DateRange, Granularity, IntervalSeries, ViewState


def normalise_granularity(value: str) -> Granularity:
    """Accept granularity names or the dashboard aliases ('15m', '1h', '1d')."""
    g = canon.GRANULARITY_ALIASES.get(value, value)
    exceptions.require(
        g in get_args(Granularity),
        f"Unknown granularity '{value}'",
        exceptions.ConfigError,
    )
    return g  # type: ignore[return-value]


def dataset_bounds(dataset: Mapping[str, IntervalSeries]) -> Optional[DateRange]:
    """Earliest and latest calendar date across all farms, or None if no data."""
    lows, highs = [], []
    for series in dataset.values():
        idx = utils.parse_timestamps(series.timestamps).dropna()
        if len(idx):
            lows.append(idx.min())
            highs.append(idx.max())
    if not lows:
        return None
    return DateRange(start=min(lows).date(), end=max(highs).date())


def range_last_days(max_date: date | str, days: int) -> DateRange:
    """Inclusive window of `days` calendar days ending on max_date."""
    exceptions.require(days >= 1, "days must be >= 1", exceptions.ConfigError)
    end = pd.Timestamp(max_date).date()
    return DateRange(start=end - timedelta(days=days - 1), end=end)


def range_all(dataset: Mapping[str, IntervalSeries]) -> DateRange:
    bounds = dataset_bounds(dataset)
    if bounds is None:
        raise exceptions.ConfigError("Dataset has no parseable timestamps.")
    return bounds


def make_view(
    dataset: Mapping[str, IntervalSeries],
    farm: str,
    date_range: DateRange | Mapping[str, str],
    granularity: str = "native",
) -> ViewState:
    """Validated, immutable selection for one recomputation pass."""
    if farm not in dataset:
        raise exceptions.ConfigError(
            f"Unknown farm '{farm}'. Available farms: {', '.join(dataset)}"
        )
    dr = date_range if isinstance(date_range, DateRange) else DateRange.model_validate(date_range)
    return ViewState(farm=farm, date_range=dr, granularity=normalise_granularity(granularity))
