from __future__ import annotations
import math
import numpy as np
from typing import Optional

from . import transform, utils
from .config import EngineConfig, default_config
from .types import ClippingStats, FarmStats, IntervalSeries, KPIs


def period_days(series: IntervalSeries) -> float:
    """Elapsed days between first and last sample, floored at 1."""
    if series.is_empty:
        return 1.0
    days = utils.days_between(series.timestamps[0], series.timestamps[-1])
    if not math.isfinite(days):
        return 1.0
    return max(1.0, days)


def compute_kpis(
    series: IntervalSeries, config: Optional[EngineConfig] = None
) -> KPIs:
    """
    Summary statistics for a (filtered) series.

    Always numeric; an empty series gives all zeros. capacity_factor_pct is the
    ratio of mean generating-interval power to observed peak, a proxy rather
    than a nameplate capacity factor.
    """
    cfg = (config or default_config()).kpi
    values = np.asarray(series.values, dtype=float)

    total = transform.to_energy(values, series.durations)
    peak = float(max(values.max(), 0.0)) if len(values) else 0.0

    generating = values[values > 0]
    avg = float(generating.mean()) if len(generating) else 0.0
    cf = (avg / peak * 100.0) if peak > 0 else 0.0

    co2 = total * cfg.co2_tonnes_per_mwh
    if len(values) and cfg.household_mwh_per_year > 0:
        households = (total / period_days(series)) / (cfg.household_mwh_per_year / 365.0)
    else:
        households = 0.0

    return KPIs(
        total_energy=float(total),
        peak_power=peak,
        average_power=avg,
        capacity_factor_pct=float(cf),
        co2_avoided_proxy=float(co2),
        household_equivalent_proxy=float(households),
    )


def farm_stats(series: IntervalSeries) -> FarmStats:
    """Observed peak and span over a full, unfiltered series."""
    values = np.asarray(series.values, dtype=float)
    return FarmStats(
        peak=float(max(values.max(), 0.0)) if len(values) else 0.0,
        first=series.timestamps[0] if len(series) else None,
        last=series.timestamps[-1] if len(series) else None,
        samples=len(series),
    )


def clipping(
    series: IntervalSeries,
    mw_grid: Optional[float],
    config: Optional[EngineConfig] = None,
) -> Optional[ClippingStats]:
    """
    Curtailment proxy: share of generating intervals at/above the clipping
    threshold of grid capacity, and the hours they cover.

    None when grid capacity is unknown or not positive.
    """
    if mw_grid is None or mw_grid <= 0:
        return None
    cfg = (config or default_config()).kpi
    values = np.asarray(series.values, dtype=float)
    durations = np.asarray(series.durations, dtype=float)

    generating = values > 0
    n = int(generating.sum())
    if n == 0:
        return ClippingStats(clipping_pct=0.0, clipping_hrs=0.0)

    clipped = generating & (values >= cfg.clipping_threshold * mw_grid)
    return ClippingStats(
        clipping_pct=float(clipped.sum()) / n * 100.0,
        clipping_hrs=float(durations[clipped].sum()),
    )
