"""Dataset loading from records, frames and metadata mappings."""

import pandas as pd
import pytest

from farmdatalogic import exceptions, ingest


def test_from_dataset_roundtrips_strings():
    data = {
        "Alpha": {
            "timestamps": ["2024-06-01T00:00", "2024-06-01T00:15"],
            "values": [1, 2],
            "durations": [0.25, 0.25],
        }
    }
    out = ingest.from_dataset(data)
    assert list(out) == ["Alpha"]
    s = out["Alpha"]
    assert s.timestamps == ["2024-06-01T00:00", "2024-06-01T00:15"]
    assert s.values == [1.0, 2.0]


def test_from_records_aliases_and_inferred_durations():
    s = ingest.from_records(
        {"ts": ["2024-06-01T00:00", "2024-06-01T00:30", "2024-06-01T01:00"], "MW": [1, 2, 3]}
    )
    assert s.durations == [0.5, 0.5, 0.5]


def test_from_records_datetimes_become_iso_strings():
    idx = pd.date_range("2024-06-01", periods=2, freq="15min")
    s = ingest.from_records({"timestamp": list(idx), "power": [1.0, 1.0], "duration": [0.25, 0.25]})
    assert s.timestamps == ["2024-06-01T00:00:00", "2024-06-01T00:15:00"]


def test_from_records_rejects_length_mismatch():
    with pytest.raises(exceptions.IngestError):
        ingest.from_records(
            {"timestamps": ["2024-06-01T00:00"], "values": [1.0, 2.0], "durations": [0.25]}
        )


def test_from_records_rejects_non_positive_durations():
    with pytest.raises(exceptions.IngestError):
        ingest.from_records(
            {"timestamps": ["2024-06-01T00:00", "2024-06-01T00:15"], "values": [1.0, 2.0], "durations": [0.25, 0.0]}
        )


def test_from_records_rejects_unsorted():
    with pytest.raises(exceptions.IngestError):
        ingest.from_records(
            {"timestamps": ["2024-06-01T00:15", "2024-06-01T00:00"], "values": [1.0, 2.0], "durations": [0.25, 0.25]}
        )


def test_from_records_missing_columns():
    with pytest.raises(exceptions.IngestError):
        ingest.from_records({"values": [1.0]})


def test_from_records_warns_on_unparseable(caplog):
    with caplog.at_level("WARNING", logger="farmdatalogic.ingest"):
        s = ingest.from_records(
            {"timestamps": ["garbage", "2024-06-01T00:00"], "values": [1.0, 2.0], "durations": [0.25, 0.25]},
            name="Alpha",
        )
    assert len(s) == 2
    assert "unparseable" in caplog.text


def test_from_dataframe_long_format():
    df = pd.DataFrame(
        {
            "farm": ["A", "A", "B"],
            "timestamp": ["2024-06-01T00:00", "2024-06-01T00:15", "2024-06-01T00:00"],
            "mw": [1.0, 2.0, 5.0],
            "duration_h": [0.25, 0.25, 0.25],
        }
    )
    out = ingest.from_dataframe(df)
    assert list(out) == ["A", "B"]
    assert out["A"].values == [1.0, 2.0]
    assert out["B"].timestamps == ["2024-06-01T00:00"]


def test_from_dataframe_tz_aware_index_keeps_wall_clock():
    idx = pd.date_range("2024-06-01 10:00", periods=2, freq="15min", tz="Europe/Madrid")
    df = pd.DataFrame({"value": [3.0, 4.0]}, index=idx)
    out = ingest.from_dataframe(df, farm="Solo")
    s = out["Solo"]
    assert s.timestamps == ["2024-06-01T10:00:00", "2024-06-01T10:15:00"]
    assert s.durations == [0.25, 0.25]


def test_from_dataframe_requires_farm():
    df = pd.DataFrame({"timestamp": ["2024-06-01T00:00"], "value": [1.0]})
    with pytest.raises(exceptions.IngestError):
        ingest.from_dataframe(df)


def test_load_meta():
    meta = ingest.load_meta(
        {"Alpha": {"mw_grid": 50, "mwp": 62.5, "technology": "Single-axis tracker", "extra": 1}}
    )
    assert meta["Alpha"].mw_grid == 50.0
    assert meta["Alpha"].lat is None
    with pytest.raises(exceptions.IngestError):
        ingest.load_meta({"Alpha": {"mw_grid": "lots"}})


def test_from_records_accepts_offset_timestamps():
    s = ingest.from_records(
        {"ts": ["2024-06-01T00:00Z", "2024-06-01T00:15+01:00", "2024-06-01T00:30"], "MW": [1, 2, 3]}
    )
    assert s.durations == [0.25, 0.25, 0.25]
