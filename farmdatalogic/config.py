from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from . import canon


@dataclass
class KPIConfig:
    # Emissions displacement factor (tCO2e per MWh)
    co2_tonnes_per_mwh: float = canon.CO2_TONNES_PER_MWH
    # Annual consumption of one household (MWh/year)
    household_mwh_per_year: float = canon.HOUSEHOLD_MWH_PER_YEAR
    # Fraction of grid capacity at/above which an interval counts as clipped
    clipping_threshold: float = canon.CLIPPING_THRESHOLD


@dataclass
class SeasonalityConfig:
    summer_months: List[int] = field(
        default_factory=lambda: list(canon.SUMMER_MONTHS)
    )  # Jun–Aug
    winter_months: List[int] = field(
        default_factory=lambda: list(canon.WINTER_MONTHS)
    )  # Dec–Feb


@dataclass
class ReferenceConfig:
    # Conservative daylight hours for the daily grid-capacity reference
    daylight_hours: float = canon.REFERENCE_DAYLIGHT_HOURS


@dataclass
class EngineConfig:
    kpi: KPIConfig = field(default_factory=KPIConfig)
    seasonality: SeasonalityConfig = field(default_factory=SeasonalityConfig)
    reference: ReferenceConfig = field(default_factory=ReferenceConfig)


def default_config() -> EngineConfig:
    return EngineConfig()
