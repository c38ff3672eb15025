"""Data models for ingestion layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

MedalKind = Literal["gold", "silver", "bronze", "other"]

MEDAL_KEYWORDS: Tuple[MedalKind, ...] = ("gold", "silver", "bronze")


def classify_medal(medal_type: Optional[str]) -> MedalKind:
    """Map a free-text medal type such as ``"Gold Medal"`` onto a medal kind."""
    lowered = (medal_type or "").lower()
    for keyword in MEDAL_KEYWORDS:
        if keyword in lowered:
            return keyword
    return "other"


class Athlete(BaseModel):
    """Normalized participant record."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    name: str = "Unknown"
    gender_label: str = "Unknown"
    country_code: str = ""
    country_name: str = ""
    discipline_label: str = "Unknown"
    birth_date: Optional[date] = None


class MedalEvent(BaseModel):
    """A single medal award; an athlete may appear in any number of these."""

    model_config = ConfigDict(frozen=True)

    medal_kind: MedalKind = "other"
    medal_type: str = ""
    medal_date: Optional[date] = None
    athlete_code: str = Field(default="", description="Foreign key into Athlete.code, not enforced")
    name: str = ""
    gender: str = ""
    discipline: str = ""
    event: str = ""
    country_code: str = ""
    country_name: str = ""


@dataclass
class RawDataset:
    """Both normalized record sets of one load, with the resources they came from."""

    athletes: List[Athlete]
    medal_events: List[MedalEvent]
    sources: List[str] = field(default_factory=list)
