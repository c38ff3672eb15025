"""CSV ingestion and row normalization for athlete and medal record sets."""
from __future__ import annotations

import io
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .errors import LoadFailure, MalformedInputError
from .models import Athlete, MedalEvent, classify_medal

log = logging.getLogger(__name__)

RowSet = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]

ATHLETE_COLUMNS: Dict[str, str] = {
    "code": "code",
    "name": "name",
    "gender_label": "gender",
    "country_code": "country_code",
    "country_name": "country_long",
    "discipline_label": "disciplines",
    "birth_date": "birth_date",
}

MEDAL_COLUMNS: Dict[str, str] = {
    "medal_type": "medal_type",
    "medal_date": "medal_date",
    "name": "name",
    "gender": "gender",
    "discipline": "discipline",
    "event": "event",
    "athlete_code": "code",
    "country_code": "country_code",
    "country_name": "country_long",
}

UNKNOWN = "Unknown"


def _clean_text(value: Any, default: str = "") -> str:
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return default
    text = str(value).strip()
    return text or default


def _parse_date(value: Any) -> Optional[date]:
    text = _clean_text(value)
    if not text:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def _iter_rows(rows: RowSet, kind: str) -> Iterable[Mapping[str, Any]]:
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict(orient="records")
    if isinstance(rows, (str, bytes, Mapping)):
        raise MalformedInputError(f"{kind} rows must be a table of records, got {type(rows).__name__}")
    try:
        materialized = list(rows)
    except TypeError as exc:
        raise MalformedInputError(f"{kind} rows are not iterable: {exc}") from exc
    for idx, row in enumerate(materialized):
        if not isinstance(row, Mapping):
            raise MalformedInputError(f"{kind} row {idx} is not a record: {row!r}")
    return materialized


def normalize_athletes(rows: RowSet) -> List[Athlete]:
    """Coerce raw athlete rows into typed records; bad cells fall back to defaults."""
    athletes: List[Athlete] = []
    for row in _iter_rows(rows, "athlete"):
        data = {field: row.get(column) for field, column in ATHLETE_COLUMNS.items()}
        athletes.append(
            Athlete(
                code=_clean_text(data["code"]),
                name=_clean_text(data["name"], UNKNOWN),
                gender_label=_clean_text(data["gender_label"], UNKNOWN),
                country_code=_clean_text(data["country_code"]),
                country_name=_clean_text(data["country_name"]),
                discipline_label=_clean_text(data["discipline_label"], UNKNOWN),
                birth_date=_parse_date(data["birth_date"]),
            )
        )
    log.debug("Normalized %d athlete rows", len(athletes))
    return athletes


def normalize_medal_events(rows: RowSet) -> List[MedalEvent]:
    """Coerce raw medal rows into typed records, classifying each medal type."""
    events: List[MedalEvent] = []
    for row in _iter_rows(rows, "medal"):
        data = {field: row.get(column) for field, column in MEDAL_COLUMNS.items()}
        medal_type = _clean_text(data["medal_type"])
        events.append(
            MedalEvent(
                medal_kind=classify_medal(medal_type),
                medal_type=medal_type,
                medal_date=_parse_date(data["medal_date"]),
                athlete_code=_clean_text(data["athlete_code"]),
                name=_clean_text(data["name"]),
                gender=_clean_text(data["gender"]),
                discipline=_clean_text(data["discipline"]),
                event=_clean_text(data["event"]),
                country_code=_clean_text(data["country_code"]),
                country_name=_clean_text(data["country_name"]),
            )
        )
    log.debug("Normalized %d medal rows", len(events))
    return events


def read_table(source: Union[Path, str, io.StringIO], label: str) -> pd.DataFrame:
    """Read a CSV resource with every cell kept as text."""
    try:
        return pd.read_csv(source, dtype=str, keep_default_na=False, na_filter=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise MalformedInputError(f"{label} could not be read as CSV: {exc}") from exc
    except OSError as exc:
        raise LoadFailure(f"{label} could not be opened: {exc}") from exc


def load_athletes_csv(path: Path) -> List[Athlete]:
    """Load and normalize an athletes CSV file."""
    return normalize_athletes(read_table(path, str(path)))


def load_medals_csv(path: Path) -> List[MedalEvent]:
    """Load and normalize a medals CSV file."""
    return normalize_medal_events(read_table(path, str(path)))
