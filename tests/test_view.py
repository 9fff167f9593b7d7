"""View state construction and range presets."""

from datetime import date

import pytest
from pydantic import ValidationError

from farmdatalogic import exceptions, view
from farmdatalogic.types import DateRange, IntervalSeries


@pytest.mark.parametrize(
    "value,expected",
    [("15m", "native"), ("1h", "hourly"), ("1d", "daily"), ("hourly", "hourly")],
)
def test_normalise_granularity(value, expected):
    assert view.normalise_granularity(value) == expected


def test_normalise_granularity_unknown():
    with pytest.raises(exceptions.ConfigError):
        view.normalise_granularity("1w")


def test_range_last_days():
    r = view.range_last_days("2024-06-30", 7)
    assert r == DateRange(start=date(2024, 6, 24), end=date(2024, 6, 30))
    assert view.range_last_days(date(2024, 6, 30), 1).start == date(2024, 6, 30)
    with pytest.raises(exceptions.ConfigError):
        view.range_last_days("2024-06-30", 0)


def test_dataset_bounds(dataset):
    b = view.dataset_bounds(dataset)
    assert b.start == date(2024, 6, 1)
    assert b.end == date(2024, 6, 3)
    assert view.range_all(dataset) == b


def test_dataset_bounds_empty():
    empty = {"X": IntervalSeries(timestamps=[], values=[], durations=[])}
    assert view.dataset_bounds(empty) is None
    with pytest.raises(exceptions.ConfigError):
        view.range_all(empty)


def test_make_view(dataset):
    v = view.make_view(dataset, "Beta", {"from": "2024-06-02", "to": "2024-06-03"}, "1h")
    assert v.farm == "Beta"
    assert v.granularity == "hourly"
    assert v.date_range.start == date(2024, 6, 2)
    with pytest.raises(ValidationError):
        v.farm = "Alpha"  # type: ignore[misc]
    with pytest.raises(exceptions.ConfigError):
        view.make_view(dataset, "Gamma", {"from": "2024-06-02", "to": "2024-06-03"})
