"""Top-level dashboard state: the loaded dataset plus the shared country filter."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from medalboard.aggregation.engine import AggregationResult, run_pipeline
from medalboard.config import Settings, get_settings
from medalboard.ingest.csv_loader import normalize_athletes, normalize_medal_events
from medalboard.ingest.errors import LoadFailure
from medalboard.ingest.fetch import ResourceFetcher, load_dataset
from medalboard.ingest.models import RawDataset
from medalboard.views.derived import (
    BarView,
    ProfileView,
    ScatterView,
    build_bar_view,
    build_profile_view,
    build_scatter_view,
)
from medalboard.views.selection import SelectionSnapshot, SelectionState

log = logging.getLogger(__name__)

Loader = Callable[[str, str], RawDataset]


@dataclass
class DashboardSnapshot:
    selection: SelectionSnapshot
    bar: BarView
    scatter: ScatterView
    profile: ProfileView


class DashboardController:
    """Owns one dataset and one selection and derives every chart's data from them."""

    def __init__(self, settings: Optional[Settings] = None, loader: Optional[Loader] = None) -> None:
        self.settings = settings or get_settings()
        self.loader = loader
        self.selection = SelectionState()
        self.result: Optional[AggregationResult] = None
        self.error: Optional[str] = None

    def load(self) -> DashboardSnapshot:
        """Fetch both resources and rebuild the dataset; any failure leaves nothing loaded."""
        self._reset()
        try:
            loader = self.loader or self._fetch
            raw = loader(self.settings.athletes_source, self.settings.medals_source)
        except LoadFailure as exc:
            self.error = str(exc)
            log.error("Dashboard load failed: %s", exc)
            raise
        return self._ingest(raw)

    def load_records(
        self,
        athlete_rows: Iterable[Mapping[str, Any]],
        medal_rows: Iterable[Mapping[str, Any]],
    ) -> DashboardSnapshot:
        self._reset()
        try:
            raw = RawDataset(
                athletes=normalize_athletes(athlete_rows),
                medal_events=normalize_medal_events(medal_rows),
            )
        except LoadFailure as exc:
            self.error = str(exc)
            raise
        return self._ingest(raw)

    def toggle(self, code: str) -> DashboardSnapshot:
        self._require_loaded()
        self.selection.toggle(code)
        return self.snapshot()

    def clear(self) -> DashboardSnapshot:
        self._require_loaded()
        self.selection.clear()
        return self.snapshot()

    def snapshot(self) -> DashboardSnapshot:
        result = self._require_loaded()
        selection = self.selection.snapshot()
        active = selection.active_country
        return DashboardSnapshot(
            selection=selection,
            bar=build_bar_view(result.country_profiles, active, limit=self.settings.bar_country_limit),
            scatter=build_scatter_view(result.athlete_aggregates, active, top_n=self.settings.top_group_count),
            profile=build_profile_view(result.country_profiles, active),
        )

    def _fetch(self, athletes_source: str, medals_source: str) -> RawDataset:
        fetcher = ResourceFetcher(timeout=self.settings.fetch_timeout)
        return load_dataset(athletes_source, medals_source, fetcher=fetcher)

    def _reset(self) -> None:
        self.selection.clear()
        self.result = None
        self.error = None

    def _ingest(self, raw: RawDataset) -> DashboardSnapshot:
        self.result = run_pipeline(raw.athletes, raw.medal_events, self.settings.reference_date)
        return self.snapshot()

    def _require_loaded(self) -> AggregationResult:
        if self.result is None:
            raise RuntimeError("No dataset loaded; call load() first")
        return self.result
