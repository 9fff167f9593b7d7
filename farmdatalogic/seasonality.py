from __future__ import annotations
import pandas as pd
from typing import Optional, Sequence

from . import canon, transform, utils
from .config import EngineConfig, default_config
from .types import IntervalSeries, MonthlyProfile, YearMonthTotal


def monthly_energy_gwh(series: IntervalSeries) -> pd.Series:
    """
    Energy per (year, month), in GWh, indexed by 'YYYY-MM' ascending.
    Only months with at least one sample appear.
    """
    df = series.to_frame()
    mwh = transform.energy_by(
        utils.month_keys(pd.DatetimeIndex(df.index)), df.mw, df.duration_h
    )
    out = mwh / canon.MWH_PER_GWH
    out.index.name = "month"
    return out


def monthly_averages(ym_totals: pd.Series) -> list[float]:
    """
    Per calendar month (Jan..Dec), the mean over the years that have data for
    that month. Months never observed are 0; absent years do not count.
    """
    if ym_totals.empty:
        return [0.0] * 12
    months = pd.Index(ym_totals.index).str.slice(5, 7).astype(int)
    means = ym_totals.groupby(months.to_numpy()).mean()
    return [float(means.get(m, 0.0)) for m in range(1, 13)]


def season_sum(averages: Sequence[float], months: Sequence[int]) -> float:
    return float(sum(averages[m - 1] for m in months))


def seasonality_ratio(
    averages: Sequence[float], config: Optional[EngineConfig] = None
) -> Optional[float]:
    """Summer/winter ratio of monthly averages; None unless both sums are > 0."""
    cfg = (config or default_config()).seasonality
    summer = season_sum(averages, cfg.summer_months)
    winter = season_sum(averages, cfg.winter_months)
    if summer > 0 and winter > 0:
        return summer / winter
    return None


def compute_monthly_profile(
    full: IntervalSeries,
    filtered: IntervalSeries,
    config: Optional[EngineConfig] = None,
) -> MonthlyProfile:
    """
    Historical monthly averages from the full series, selected-range averages
    from the filtered one, plus per-year totals for the scatter overlay.
    """
    cfg = config or default_config()

    full_ym = monthly_energy_gwh(full)
    historical = monthly_averages(full_ym)
    selected = monthly_averages(monthly_energy_gwh(filtered))

    per_year = [
        YearMonthTotal(year=int(ym[:4]), month=int(ym[5:7]), gwh=float(gwh))
        for ym, gwh in full_ym.items()
    ]

    return MonthlyProfile(
        historical_average=historical,
        selected_average=selected,
        per_year_totals=per_year,
        summer_sum=season_sum(historical, cfg.seasonality.summer_months),
        winter_sum=season_sum(historical, cfg.seasonality.winter_months),
        seasonality_ratio=seasonality_ratio(historical, cfg),
    )
