from . import (
    canon,
    types,
    exceptions,
    config,
    utils,
    validate,
    ingest,
    transform,
    kpi,
    seasonality,
    view,
    formats,
    summary,
    dashboard,
)

__all__ = [
    "canon",
    "types",
    "exceptions",
    "config",
    "utils",
    "validate",
    "ingest",
    "transform",
    "kpi",
    "seasonality",
    "view",
    "formats",
    "summary",
    "dashboard",
]
