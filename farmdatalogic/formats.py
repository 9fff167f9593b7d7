"""Display-boundary helpers.

The engine always returns real numbers; turning zeros into the placeholder
glyph, and other presentation choices, happen here and nowhere else.
"""

from __future__ import annotations

from typing import Literal, Optional

import pandas as pd

from . import canon
from .types import Granularity, KPIs

TechnologyKind = Literal["tracker", "fixed", "unknown"]
ClippingLevel = Literal["high", "medium", "low"]


def format_number(n: float) -> str:
    """One decimal; thousands collapse to a 'k' suffix (12345 -> '12.3k')."""
    if n >= 1000:
        return f"{n / 1000:.1f}k"
    return f"{n:.1f}"


def format_kpis(kpis: KPIs) -> dict[str, str]:
    """KPI tiles; a zero defining quantity shows the placeholder."""
    has_energy = kpis.total_energy > 0
    ph = canon.PLACEHOLDER
    return {
        "total_energy": format_number(kpis.total_energy) if has_energy else ph,
        "peak_power": format_number(kpis.peak_power) if kpis.peak_power > 0 else ph,
        "average_power": (
            format_number(kpis.average_power) if kpis.average_power > 0 else ph
        ),
        "capacity_factor_pct": (
            f"{kpis.capacity_factor_pct:.1f}%" if kpis.capacity_factor_pct > 0 else ph
        ),
        "co2_avoided_proxy": (
            format_number(kpis.co2_avoided_proxy) if has_energy else ph
        ),
        "household_equivalent_proxy": (
            format_number(kpis.household_equivalent_proxy) if has_energy else ph
        ),
    }


def format_ratio(ratio: Optional[float]) -> Optional[str]:
    return f"{ratio:.2f}x" if ratio is not None else None


def format_first_generation(first_gen: Optional[str]) -> str:
    """'2021-06-01' -> '1 June 2021'."""
    if not first_gen:
        return "No data in dataset"
    t = pd.to_datetime(first_gen, errors="coerce")
    if pd.isna(t):
        return str(first_gen)
    return f"{t.day} {t.strftime('%B %Y')}"


def format_coords(lat: Optional[float], lon: Optional[float]) -> str:
    if lat is None or lon is None:
        return canon.PLACEHOLDER
    return f"{lat:.4f}° N,  {lon:.4f}° E"


def technology_kind(technology: Optional[str]) -> TechnologyKind:
    tech = (technology or "").lower()
    if "tracker" in tech:
        return "tracker"
    if "fixed" in tech:
        return "fixed"
    return "unknown"


def clipping_level(clipping_pct: Optional[float]) -> Optional[ClippingLevel]:
    if clipping_pct is None:
        return None
    if clipping_pct > 20:
        return "high"
    if clipping_pct > 8:
        return "medium"
    return "low"


def series_subtitle(granularity: Granularity) -> str:
    return {
        "native": "Actual generation at native resolution (MW)",
        "hourly": "Hourly average generation (MW)",
        "daily": "Daily average generation (MW)",
    }[granularity]
