from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Mapping, Optional, cast

from . import kpi, seasonality, transform, utils
from .config import EngineConfig, default_config
from .types import (
    DashboardPayload,
    FarmMeta,
    IntervalSeries,
    ReferenceLine,
    ViewState,
)

logger = logging.getLogger(__name__)


def reference_lines(
    meta: Optional[FarmMeta], config: Optional[EngineConfig] = None
) -> tuple[list[ReferenceLine], list[ReferenceLine]]:
    """
    Capacity reference lines as (series_lines, daily_lines).

    - grid access capacity (MW) on the power chart
    - installed capacity (MWp), only when it differs from grid capacity
    - grid capacity x daylight hours (MWh) on the daily energy chart
    """
    cfg = (config or default_config()).reference
    series_lines: list[ReferenceLine] = []
    daily_lines: list[ReferenceLine] = []
    if meta is None:
        return series_lines, daily_lines

    if meta.mw_grid:
        series_lines.append(
            ReferenceLine(key="grid", label=f"Grid {meta.mw_grid:g} MW", value=meta.mw_grid)
        )
        ref_mwh = meta.mw_grid * cfg.daylight_hours
        daily_lines.append(
            ReferenceLine(
                key="daily_grid",
                label=f"Grid cap. ×{cfg.daylight_hours:g}h = {ref_mwh:g} MWh",
                value=ref_mwh,
            )
        )
    if meta.mwp and meta.mwp != meta.mw_grid:
        series_lines.append(
            ReferenceLine(key="installed", label=f"Installed {meta.mwp:g} MWp", value=meta.mwp)
        )
    return series_lines, daily_lines


def summarise(
    dataset: Mapping[str, IntervalSeries],
    view: ViewState,
    meta: Optional[Mapping[str, FarmMeta]] = None,
    config: Optional[EngineConfig] = None,
) -> DashboardPayload:
    """One full recomputation pass for the selected farm, range and granularity."""
    cfg = config or default_config()
    full = dataset[view.farm]
    filtered = transform.filter_range(full, view.date_range)
    logger.debug(
        "Recomputing %s %s..%s (%s): %d of %d samples",
        view.farm,
        view.date_range.start,
        view.date_range.end,
        view.granularity,
        len(filtered),
        len(full),
    )

    agg = transform.aggregate(filtered.timestamps, filtered.values, view.granularity)
    kpis = kpi.compute_kpis(filtered, cfg)
    daily = transform.daily_energy(filtered)
    heat = transform.heatmap(filtered)
    profile = seasonality.compute_monthly_profile(full, filtered, cfg)
    compare = transform.compare_daily(dataset, view.date_range)
    farm_meta = (meta or {}).get(view.farm)
    series_refs, daily_refs = reference_lines(farm_meta, cfg)
    clip = kpi.clipping(filtered, farm_meta.mw_grid if farm_meta else None, cfg)

    monthly = None
    if not profile.is_empty:
        monthly = {
            "historical_average": profile.historical_average,
            "selected_average": profile.selected_average,
            "per_year_totals": [asdict(t) for t in profile.per_year_totals],
            "summer_sum": profile.summer_sum,
            "winter_sum": profile.winter_sum,
            "seasonality_ratio": profile.seasonality_ratio,
        }

    payload: DashboardPayload = cast(
        DashboardPayload,
        {
            "farm": view.farm,
            "range": {
                "from": view.date_range.start.isoformat(),
                "to": view.date_range.end.isoformat(),
            },
            "kpis": asdict(kpis),
            "series": {
                "granularity": view.granularity,
                "timestamps": agg.timestamps,
                "values": agg.values,
                "weekends": utils.weekend_dates(filtered.timestamps),
            },
            "daily": {"dates": daily.dates, "mwh": daily.mwh},
            "heatmap": {"dates": heat.dates, "hours": heat.hours, "z": heat.z},
            "monthly": monthly,
            "stats": {
                **asdict(kpi.farm_stats(full)),
                "clipping": asdict(clip) if clip is not None else None,
            },
            "compare": {
                name: {"dates": d.dates, "mwh": d.mwh} for name, d in compare.items()
            },
            "references": {
                "series": [asdict(r) for r in series_refs],
                "daily": [asdict(r) for r in daily_refs],
            },
        },
    )
    return payload
