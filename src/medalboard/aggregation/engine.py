"""Folds athlete and medal records into country profiles and athlete aggregates."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Set, Tuple

from medalboard.aggregation.schema import AthleteMedalAggregate, CountryProfile
from medalboard.ingest.models import Athlete, MedalEvent

log = logging.getLogger(__name__)


@dataclass
class _CountryTally:
    country_name: str
    gold: int = 0
    silver: int = 0
    bronze: int = 0
    total: int = 0
    athletes: Set[str] = field(default_factory=set)
    disciplines: Set[str] = field(default_factory=set)

    def add(self, event: MedalEvent) -> None:
        if event.medal_kind == "gold":
            self.gold += 1
        elif event.medal_kind == "silver":
            self.silver += 1
        elif event.medal_kind == "bronze":
            self.bronze += 1
        self.total += 1
        if event.athlete_code:
            self.athletes.add(event.athlete_code)
        if event.discipline:
            self.disciplines.add(event.discipline)


@dataclass
class AggregationResult:
    """Everything one pipeline run produces."""

    country_profiles: List[CountryProfile]
    athlete_aggregates: List[AthleteMedalAggregate]
    unmatched_medal_events: int = 0


def compute_age_years(birth_date: Optional[date], reference_date: date) -> Optional[int]:
    """Whole years between the dates, minus one if the birthday has not come round yet."""
    if birth_date is None:
        return None
    age = reference_date.year - birth_date.year
    if (reference_date.month, reference_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def build_country_profiles(medal_events: Iterable[MedalEvent]) -> List[CountryProfile]:
    """One profile per country code seen, sorted by total medals, largest first.

    The country name comes from the first event seen for each code. Ties in
    ``total`` keep the order in which the countries were first encountered.
    """
    tallies: Dict[str, _CountryTally] = {}
    for event in medal_events:
        tally = tallies.get(event.country_code)
        if tally is None:
            tally = _CountryTally(country_name=event.country_name or event.country_code)
            tallies[event.country_code] = tally
        tally.add(event)

    profiles = [
        CountryProfile(
            country_code=code,
            country_name=tally.country_name,
            gold=tally.gold,
            silver=tally.silver,
            bronze=tally.bronze,
            total=tally.total,
            medalist_count=len(tally.athletes),
            discipline_count=len(tally.disciplines),
        )
        for code, tally in tallies.items()
    ]
    return sorted(profiles, key=lambda profile: profile.total, reverse=True)


def _index_medals_by_athlete(
    medal_events: Iterable[MedalEvent],
) -> Tuple[Dict[str, int], Dict[str, Tuple[str, str]]]:
    counts: Dict[str, int] = {}
    countries: Dict[str, Tuple[str, str]] = {}
    for event in medal_events:
        if not event.athlete_code:
            continue
        counts[event.athlete_code] = counts.get(event.athlete_code, 0) + 1
        countries.setdefault(event.athlete_code, (event.country_code, event.country_name))
    return counts, countries


def build_athlete_aggregates(
    athletes: Iterable[Athlete],
    medal_events: Iterable[MedalEvent],
    reference_date: date,
) -> List[AthleteMedalAggregate]:
    """One aggregate per athlete, in input order.

    Country fields prefer the athlete's first medal event and only fall back
    to the athlete record when the medal row leaves them blank or the athlete
    won nothing.
    """
    medal_counts, medal_countries = _index_medals_by_athlete(medal_events)

    aggregates: List[AthleteMedalAggregate] = []
    for athlete in athletes:
        medal_code, medal_name = medal_countries.get(athlete.code, ("", ""))
        country_code = medal_code or athlete.country_code
        aggregates.append(
            AthleteMedalAggregate(
                athlete_code=athlete.code,
                name=athlete.name or "Unknown",
                gender_label=athlete.gender_label or "Unknown",
                discipline=athlete.discipline_label or "Unknown",
                country_code=country_code,
                country_name=medal_name or athlete.country_name or country_code,
                age_years=compute_age_years(athlete.birth_date, reference_date),
                medal_count=medal_counts.get(athlete.code, 0),
            )
        )
    return aggregates


def run_pipeline(
    athletes: List[Athlete],
    medal_events: List[MedalEvent],
    reference_date: date,
) -> AggregationResult:
    """Run both aggregations over one loaded dataset."""
    profiles = build_country_profiles(medal_events)
    aggregates = build_athlete_aggregates(athletes, medal_events, reference_date)

    known_codes = {athlete.code for athlete in athletes}
    unmatched = sum(1 for event in medal_events if event.athlete_code not in known_codes)
    if unmatched:
        log.warning("%d medal events reference athletes missing from the athlete set", unmatched)

    log.info(
        "Aggregated %d medal events into %d country profiles and %d athlete aggregates",
        len(medal_events),
        len(profiles),
        len(aggregates),
    )
    return AggregationResult(
        country_profiles=profiles,
        athlete_aggregates=aggregates,
        unmatched_medal_events=unmatched,
    )
