"""Fetching of the athlete and medal resources, from disk or over HTTP."""
from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import requests

from medalboard.config import get_settings
from medalboard.ingest.csv_loader import normalize_athletes, normalize_medal_events, read_table
from medalboard.ingest.errors import LoadFailure
from medalboard.ingest.models import RawDataset

log = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class ResourceFetcher:
    """Reads a tabular resource from a local path or an http(s) URL."""

    def __init__(self, timeout: Optional[int] = None, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout or get_settings().fetch_timeout
        self.session = session or requests.Session()

    def fetch_table(self, source: str) -> pd.DataFrame:
        if _is_url(source):
            return read_table(io.StringIO(self._download(source)), source)
        path = Path(source)
        if not path.exists():
            raise LoadFailure(f"Resource not found: {source}")
        return read_table(path, source)

    def _download(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise LoadFailure(f"Could not fetch {url}: {exc}") from exc
        if not response.ok:
            raise LoadFailure(f"Fetching {url} failed with HTTP {response.status_code}")
        return response.text


def load_dataset(
    athletes_source: str,
    medals_source: str,
    fetcher: Optional[ResourceFetcher] = None,
) -> RawDataset:
    """Fetch both resources concurrently and normalize them once both arrive.

    Either fetch failing fails the whole load; no partial dataset is returned.
    """
    fetcher = fetcher or ResourceFetcher()
    sources = {"athletes": athletes_source, "medals": medals_source}
    tables: Dict[str, pd.DataFrame] = {}

    with ThreadPoolExecutor(max_workers=len(sources)) as executor:
        futures = {executor.submit(fetcher.fetch_table, source): name for name, source in sources.items()}
        for future in as_completed(futures):
            name = futures[future]
            try:
                tables[name] = future.result()
            except LoadFailure as exc:
                log.error("Loading %s from %s failed: %s", name, sources[name], exc)
                raise
            log.info("Loaded %d %s rows from %s", len(tables[name]), name, sources[name])

    return RawDataset(
        athletes=normalize_athletes(tables["athletes"]),
        medal_events=normalize_medal_events(tables["medals"]),
        sources=[athletes_source, medals_source],
    )
