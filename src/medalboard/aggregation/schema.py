"""Derived per-country and per-athlete records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CountryProfile:
    """Medal counts and cardinalities for one country code."""

    country_code: str
    country_name: str
    gold: int = 0
    silver: int = 0
    bronze: int = 0
    total: int = 0
    medalist_count: int = 0
    discipline_count: int = 0

    @property
    def other(self) -> int:
        return self.total - self.gold - self.silver - self.bronze


@dataclass(frozen=True)
class AthleteMedalAggregate:
    athlete_code: str
    name: str
    gender_label: str
    discipline: str
    country_code: str
    country_name: str
    age_years: Optional[int]
    medal_count: int = 0
