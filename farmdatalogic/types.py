from __future__ import annotations
from typing import TypedDict, Literal, List, Dict, Optional
from dataclasses import dataclass, field
from datetime import date

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator

Granularity = Literal["native", "hourly", "daily"]


# Canon DataFrame
class CanonFrame(pd.DataFrame):
    """
    Strongly-typed canonical interval dataframe for one farm.

    Expected:
      - naive DatetimeIndex named 't_start' (wall clock, no tz conversion)
      - Columns: ['ts', 'mw', 'duration_h']
    """

    @property
    def _constructor(self):
        return CanonFrame

    @property
    def ts(self) -> pd.Series:
        return self["ts"]

    @property
    def mw(self) -> pd.Series:
        return self["mw"]

    @property
    def duration_h(self) -> pd.Series:
        return self["duration_h"]


## Interval models
class IntervalSeries(BaseModel):
    """Time-stamped power curve of one farm: three parallel, equal-length sequences."""

    timestamps: list[str]  # ISO-8601, ascending
    values: list[float]  # MW
    durations: list[float]  # hours each value is held
    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _same_length(self) -> "IntervalSeries":
        n = len(self.timestamps)
        if len(self.values) != n or len(self.durations) != n:
            raise ValueError(
                f"timestamps/values/durations lengths differ: "
                f"{n}/{len(self.values)}/{len(self.durations)}"
            )
        return self

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def is_empty(self) -> bool:
        return len(self.timestamps) == 0

    def to_frame(self) -> CanonFrame:
        """CanonFrame with parsed wall-clock index; input strings kept in 'ts'."""
        from .utils import build_canon_frame

        return build_canon_frame(self)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "IntervalSeries":
        from .utils import series_from_frame

        return series_from_frame(df, cls)


class FilteredSeries(IntervalSeries):
    """An IntervalSeries restricted to a DateRange (copied, never a live view)."""


class DateRange(BaseModel):
    """Inclusive calendar-date window. Accepts 'from'/'to' as field aliases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: date = Field(alias="from")
    end: date = Field(alias="to")


class AggregatedSeries(BaseModel):
    timestamps: list[str]  # bucket keys, ascending
    values: list[float]  # bucket-mean MW
    model_config = {"frozen": True}


class FarmMeta(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    province: Optional[str] = None
    technology: Optional[str] = None
    mwp: Optional[float] = None
    mw_grid: Optional[float] = None
    area_ha: Optional[float] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    first_gen: Optional[str] = None
    notes: Optional[str] = None
    eic_code: Optional[str] = None
    display_name: Optional[str] = None
    unit_name_gu: Optional[str] = None
    dc_ac_ratio: Optional[float] = None
    clipping_pct: Optional[float] = None
    clipping_hrs: Optional[float] = None


class ViewState(BaseModel):
    """Selection driving one full recomputation pass."""

    model_config = ConfigDict(frozen=True)

    farm: str
    date_range: DateRange
    granularity: Granularity = "native"


## Results
@dataclass(frozen=True)
class KPIs:
    total_energy: float  # MWh
    peak_power: float  # MW
    average_power: float  # MW, generating intervals only
    capacity_factor_pct: float  # average/peak proxy, not nameplate based
    co2_avoided_proxy: float  # tCO2e
    household_equivalent_proxy: float  # households served per day


@dataclass(frozen=True)
class DailyEnergy:
    dates: List[str] = field(default_factory=list)
    mwh: List[float] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.dates

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(self.dates, self.mwh))


@dataclass(frozen=True)
class Heatmap:
    dates: List[str]
    hours: List[int]
    z: List[List[float]]  # z[hour][date], mean MW


@dataclass(frozen=True)
class YearMonthTotal:
    year: int
    month: int
    gwh: float


@dataclass(frozen=True)
class MonthlyProfile:
    historical_average: List[float]  # GWh, index 0 = January
    selected_average: List[float]
    per_year_totals: List[YearMonthTotal]
    summer_sum: float = 0.0
    winter_sum: float = 0.0
    seasonality_ratio: Optional[float] = None  # None when undefined

    @property
    def is_empty(self) -> bool:
        return not self.per_year_totals and all(v == 0 for v in self.selected_average)


@dataclass(frozen=True)
class ReferenceLine:
    key: Literal["grid", "installed", "daily_grid"]
    label: str
    value: float


@dataclass(frozen=True)
class FarmStats:
    peak: float
    first: Optional[str]
    last: Optional[str]
    samples: int


@dataclass(frozen=True)
class ClippingStats:
    clipping_pct: float
    clipping_hrs: float


## Payload
class SeriesPayload(TypedDict):
    granularity: Granularity
    timestamps: List[str]
    values: List[float]
    weekends: List[str]


class ReferencesPayload(TypedDict):
    series: List[Dict[str, object]]
    daily: List[Dict[str, object]]


class DashboardPayload(TypedDict):
    farm: str
    range: Dict[str, str]
    kpis: Dict[str, float]
    series: SeriesPayload
    daily: Dict[str, List]
    heatmap: Dict[str, List]
    monthly: Optional[Dict[str, object]]
    stats: Dict[str, object]
    compare: Dict[str, Dict[str, List]]
    references: ReferencesPayload
