"""Display helpers at the rendering boundary."""

from farmdatalogic import formats
from farmdatalogic.types import KPIs


def test_format_number():
    assert formats.format_number(12.34) == "12.3"
    assert formats.format_number(12345.0) == "12.3k"
    assert formats.format_number(0.0) == "0.0"


def test_format_kpis_placeholder_for_zero():
    k = KPIs(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    assert set(formats.format_kpis(k).values()) == {"—"}


def test_format_kpis_values():
    k = KPIs(
        total_energy=2500.0,
        peak_power=40.0,
        average_power=20.0,
        capacity_factor_pct=50.0,
        co2_avoided_proxy=500.0,
        household_equivalent_proxy=1200.0,
    )
    out = formats.format_kpis(k)
    assert out["total_energy"] == "2.5k"
    assert out["capacity_factor_pct"] == "50.0%"
    assert out["household_equivalent_proxy"] == "1.2k"


def test_format_first_generation():
    assert formats.format_first_generation("2021-06-01") == "1 June 2021"
    assert formats.format_first_generation(None) == "No data in dataset"


def test_format_coords_and_ratio():
    assert formats.format_coords(40.12346, -3.5) == "40.1235° N,  -3.5000° E"
    assert formats.format_coords(None, 1.0) == "—"
    assert formats.format_ratio(3.4) == "3.40x"
    assert formats.format_ratio(None) is None


def test_technology_and_clipping_levels():
    assert formats.technology_kind("Single-axis tracker") == "tracker"
    assert formats.technology_kind("Fixed tilt") == "fixed"
    assert formats.technology_kind(None) == "unknown"
    assert formats.clipping_level(25.0) == "high"
    assert formats.clipping_level(10.0) == "medium"
    assert formats.clipping_level(2.0) == "low"
    assert formats.clipping_level(None) is None


def test_series_subtitle():
    assert formats.series_subtitle("hourly") == "Hourly average generation (MW)"
