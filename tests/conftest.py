import pandas as pd
import pytest

from farmdatalogic.types import IntervalSeries

TS_FORMAT = "%Y-%m-%dT%H:%M"


def make_series(idx, values, duration=0.25):
    """15-minute-style IntervalSeries from a DatetimeIndex."""
    return IntervalSeries(
        timestamps=list(pd.DatetimeIndex(idx).strftime(TS_FORMAT)),
        values=[float(v) for v in values],
        durations=[float(duration)] * len(idx),
    )


@pytest.fixture
def quarter_rng():
    # Sat 2024-06-01 .. Mon 2024-06-03 at 15-minute cadence
    return pd.date_range("2024-06-01", periods=96 * 3, freq="15min")


@pytest.fixture
def daylight_series(quarter_rng):
    """10 MW from 06:00 to 17:45, zero overnight."""
    values = [10.0 if 6 <= t.hour < 18 else 0.0 for t in quarter_rng]
    return make_series(quarter_rng, values)


@pytest.fixture
def dataset(daylight_series):
    other_idx = pd.date_range("2024-06-02", periods=96, freq="15min")
    other = make_series(other_idx, [4.0] * len(other_idx))
    return {"Alpha": daylight_series, "Beta": other}


@pytest.fixture
def series_factory():
    return make_series
