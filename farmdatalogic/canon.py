from __future__ import annotations
from typing import Final, Dict

INDEX_NAME: Final[str] = "t_start"
REQUIRED_COLS: Final[list[str]] = ["ts", "mw", "duration_h"]

# Wall-clock part of an ISO-8601 timestamp: date plus optional HH:MM[:SS].
# Fractional seconds and any offset suffix (Z, +02, +02:00) fall outside it.
WALL_CLOCK_PATTERN: Final[str] = r"^(\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2})?)?)"
DEFAULT_CADENCE_MIN: Final[int] = 15

# Fixed-width key prefixes
DAY_KEY_LEN: Final[int] = 10
HOUR_KEY_LEN: Final[int] = 13
MONTH_KEY_LEN: Final[int] = 7

HOUR_KEY_FORMAT: Final[str] = "%Y-%m-%dT%H:00"
DAY_KEY_FORMAT: Final[str] = "%Y-%m-%d"
MONTH_KEY_FORMAT: Final[str] = "%Y-%m"

CO2_TONNES_PER_MWH: Final[float] = 0.2
HOUSEHOLD_MWH_PER_YEAR: Final[float] = 3.3
MWH_PER_GWH: Final[float] = 1000.0
CLIPPING_THRESHOLD: Final[float] = 0.92
REFERENCE_DAYLIGHT_HOURS: Final[float] = 8.0

SUMMER_MONTHS: Final[tuple[int, ...]] = (6, 7, 8)
WINTER_MONTHS: Final[tuple[int, ...]] = (12, 1, 2)

MONTH_NAMES: Final[list[str]] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Dashboard button values -> granularity
GRANULARITY_ALIASES: Dict[str, str] = {
    "15m": "native",
    "1h": "hourly",
    "1d": "daily",
}

COMMON_TIMESTAMP_NAMES = ("timestamps", "timestamp", "ts", "t_start", "time", "datetime")
COMMON_VALUE_NAMES = ("values", "value", "mw", "power", "power_mw")
COMMON_DURATION_NAMES = ("durations", "duration", "duration_h", "hours")
COMMON_FARM_NAMES = ("farm", "entity", "name", "site")

PLACEHOLDER: Final[str] = "—"
