from __future__ import annotations
import logging
import numpy as np
import pandas as pd
from typing import Mapping, Optional, Sequence

from pydantic import ValidationError

from . import canon, exceptions, utils, validate
from .types import FarmMeta, IntervalSeries

logger = logging.getLogger(__name__)


def _pick(keys: Sequence[str], candidates: Sequence[str]) -> Optional[str]:
    lowered = {str(k).lower(): k for k in keys}
    return next((lowered[c] for c in candidates if c in lowered), None)


def _iso(ts: pd.Series | pd.Index) -> list[str]:
    """Datetime-like values to ISO strings; strings pass through untouched."""
    if pd.api.types.is_datetime64_any_dtype(ts):
        idx = pd.DatetimeIndex(ts)
        if idx.tz is not None:
            idx = idx.tz_localize(None)  # keep the wall clock
        return list(idx.strftime("%Y-%m-%dT%H:%M:%S"))
    return [str(t) for t in ts]


def _durations_from_cadence(timestamps: Sequence[str]) -> list[float]:
    idx = utils.parse_timestamps(timestamps)
    hours = utils.infer_cadence_minutes(idx) / 60.0
    return [hours] * len(timestamps)


def _build(
    name: str,
    timestamps: Sequence[str],
    values: Sequence[float],
    durations: Optional[Sequence[float]],
) -> IntervalSeries:
    if durations is None:
        durations = _durations_from_cadence(timestamps)
        logger.debug("%s: no durations supplied, inferred %.4f h", name, durations[0] if durations else 0.0)
    try:
        series = IntervalSeries(
            timestamps=list(timestamps),
            values=np.asarray(values, dtype=float).tolist(),
            durations=np.asarray(durations, dtype=float).tolist(),
        )
    except (ValidationError, ValueError) as e:
        raise exceptions.IngestError(f"{name}: {e}") from e

    validate.assert_series(series, name)
    bad = int(utils.parse_timestamps(series.timestamps).isna().sum())
    if bad:
        logger.warning("%s: %d unparseable timestamps will never match a range", name, bad)
    return series


def from_records(record: Mapping[str, Sequence], *, name: str = "series") -> IntervalSeries:
    """
    Build one IntervalSeries from parallel sequences.

    Keys are matched loosely (e.g. 'timestamps'/'ts', 'values'/'mw',
    'durations'/'duration_h'). Missing durations are filled from the inferred
    cadence.
    """
    tkey = _pick(list(record), canon.COMMON_TIMESTAMP_NAMES)
    vkey = _pick(list(record), canon.COMMON_VALUE_NAMES)
    dkey = _pick(list(record), canon.COMMON_DURATION_NAMES)
    if tkey is None or vkey is None:
        raise exceptions.IngestError(
            f"{name}: expected timestamp and value sequences, got keys {sorted(record)}"
        )
    return _build(
        name,
        _iso(pd.Series(list(record[tkey]))),
        record[vkey],
        record[dkey] if dkey is not None else None,
    )


def from_dataset(data: Mapping[str, Mapping[str, Sequence]]) -> dict[str, IntervalSeries]:
    """Farm name -> parallel sequences, as shipped with the dashboard."""
    out = {name: from_records(rec, name=name) for name, rec in data.items()}
    logger.debug("Loaded %d farms", len(out))
    return out


def from_dataframe(
    df: pd.DataFrame,
    *,
    farm: Optional[str] = None,
) -> dict[str, IntervalSeries]:
    """
    Parse a long-format frame into per-farm series.

    The frame needs a timestamp (column or DatetimeIndex) and a power column;
    a farm column is required unless `farm` names the single farm. Rows keep
    their order within each farm.
    """
    d = df.copy()
    if isinstance(d.index, pd.DatetimeIndex):
        d = d.rename_axis(canon.INDEX_NAME).reset_index()

    cols = list(d.columns)
    tcol = _pick(cols, canon.COMMON_TIMESTAMP_NAMES)
    vcol = _pick(cols, canon.COMMON_VALUE_NAMES)
    dcol = _pick(cols, canon.COMMON_DURATION_NAMES)
    fcol = _pick(cols, canon.COMMON_FARM_NAMES)
    if tcol is None or vcol is None:
        raise exceptions.IngestError(
            "No timestamp/value columns found. "
            f"Expected one of {canon.COMMON_TIMESTAMP_NAMES} and {canon.COMMON_VALUE_NAMES}."
        )
    if fcol is None and farm is None:
        raise exceptions.IngestError("No farm column found; pass farm= for a single-farm frame.")

    groups = [(farm, d)] if fcol is None else list(d.groupby(fcol, sort=False))
    out: dict[str, IntervalSeries] = {}
    for name, g in groups:
        out[str(name)] = _build(
            str(name),
            _iso(g[tcol]),
            g[vcol].to_numpy(dtype=float),
            g[dcol].to_numpy(dtype=float) if dcol is not None else None,
        )
    return out


def load_meta(data: Mapping[str, Mapping[str, object]]) -> dict[str, FarmMeta]:
    try:
        return {name: FarmMeta.model_validate(m) for name, m in data.items()}
    except ValidationError as e:
        raise exceptions.IngestError(f"Invalid farm metadata: {e}") from e
