from __future__ import annotations
import logging
from typing import Callable, List, Mapping, Optional

from . import exceptions, summary, view as view_mod
from .config import EngineConfig, default_config
from .types import DashboardPayload, DateRange, FarmMeta, IntervalSeries, ViewState

logger = logging.getLogger(__name__)

# Side-effecting consumer run after the core pass (metadata panel, map, ...)
Collaborator = Callable[[ViewState, DashboardPayload], None]


class DashboardSession:
    """
    Holds the current selection and drives recomputation.

    The selection is an immutable ViewState; every change replaces it. The core
    pass never depends on collaborators: each one runs afterwards, and a
    failing collaborator is logged and skipped.
    """

    def __init__(
        self,
        dataset: Mapping[str, IntervalSeries],
        meta: Optional[Mapping[str, FarmMeta]] = None,
        *,
        config: Optional[EngineConfig] = None,
        view: Optional[ViewState] = None,
    ) -> None:
        self.dataset = dataset
        self.meta = meta or {}
        self.config = config or default_config()
        self._collaborators: List[Collaborator] = []
        if view is None:
            farm = next(iter(dataset), None)
            bounds = view_mod.dataset_bounds(dataset)
            if farm is not None and bounds is not None:
                view = ViewState(farm=farm, date_range=bounds)
        self._view = view

    @property
    def view(self) -> Optional[ViewState]:
        return self._view

    def add_collaborator(self, fn: Collaborator) -> None:
        self._collaborators.append(fn)

    def select(
        self,
        *,
        farm: Optional[str] = None,
        date_range: Optional[DateRange | Mapping[str, str]] = None,
        granularity: Optional[str] = None,
    ) -> ViewState:
        """Replace the current view with one where the given fields change."""
        current = self._view
        if current is not None:
            farm = farm if farm is not None else current.farm
            date_range = date_range if date_range is not None else current.date_range
            granularity = granularity if granularity is not None else current.granularity
        if farm is None or date_range is None:
            raise exceptions.ConfigError(
                "No current view; farm and date_range are required."
            )
        self._view = view_mod.make_view(
            self.dataset, farm, date_range, granularity or "native"
        )
        return self._view

    def select_last_days(self, days: int) -> ViewState:
        bounds = view_mod.range_all(self.dataset)
        return self.select(date_range=view_mod.range_last_days(bounds.end, days))

    def select_all(self) -> ViewState:
        return self.select(date_range=view_mod.range_all(self.dataset))

    def recompute(self) -> DashboardPayload:
        if self._view is None:
            raise exceptions.ConfigError("Dataset is empty; nothing to compute.")
        current = self._view
        payload = summary.summarise(self.dataset, current, self.meta, self.config)
        for fn in self._collaborators:
            try:
                fn(current, payload)
            except Exception:
                # A broken collaborator must not block the core payload.
                logger.warning("Collaborator %r failed for %s", fn, current.farm, exc_info=True)
        return payload
