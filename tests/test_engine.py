from __future__ import annotations

from datetime import date

import pytest

from medalboard.aggregation.engine import (
    build_athlete_aggregates,
    build_country_profiles,
    compute_age_years,
    run_pipeline,
)
from medalboard.ingest.csv_loader import normalize_athletes, normalize_medal_events
from medalboard.ingest.models import Athlete, MedalEvent

from conftest import REFERENCE_DATE


def _event(kind, athlete, country, discipline="Athletics", name=""):
    return MedalEvent(medal_kind=kind, athlete_code=athlete, country_code=country, country_name=name,
                      discipline=discipline)


@pytest.mark.parametrize(
    "birth, expected",
    [
        (date(2000, 8, 15), 23),
        (date(2000, 8, 10), 24),
        (date(2000, 8, 11), 24),
        (date(2000, 9, 1), 23),
        (date(2000, 1, 31), 24),
        (None, None),
    ],
)
def test_compute_age_years(birth, expected):
    assert compute_age_years(birth, REFERENCE_DATE) == expected


def test_two_row_fixture_yields_one_usa_profile(athlete_rows, medal_rows):
    events = normalize_medal_events(medal_rows)

    [profile] = build_country_profiles(events)

    assert profile.country_code == "USA"
    assert (profile.gold, profile.silver, profile.bronze) == (1, 1, 0)
    assert profile.total == 2
    assert profile.medalist_count == 2
    assert profile.country_name == "USA"


def test_profiles_count_every_event_and_sort_by_total():
    events = [
        _event("gold", "A1", "FRA"),
        _event("other", "B1", "USA", discipline="Swimming"),
        _event("bronze", "B2", "USA", discipline="Swimming"),
        _event("silver", "B2", "USA", discipline="Rowing"),
        _event("gold", "C1", "JPN"),
    ]

    profiles = build_country_profiles(events)

    assert [p.country_code for p in profiles] == ["USA", "FRA", "JPN"]
    assert sum(p.total for p in profiles) == len(events)
    usa = profiles[0]
    assert usa.total == 3
    assert usa.other == 1
    assert usa.medalist_count == 2
    assert usa.discipline_count == 2
    for p in profiles:
        assert p.gold + p.silver + p.bronze <= p.total


def test_country_name_from_first_event_seen():
    events = [
        _event("gold", "A1", "GBR", name="Great Britain"),
        _event("gold", "A2", "GBR", name="United Kingdom"),
    ]

    [profile] = build_country_profiles(events)

    assert profile.country_name == "Great Britain"


def test_blank_codes_and_disciplines_are_not_counted():
    events = [_event("gold", "", "KEN", discipline=""), _event("gold", "A1", "KEN", discipline="")]

    [profile] = build_country_profiles(events)

    assert profile.total == 2
    assert profile.medalist_count == 1
    assert profile.discipline_count == 0


def test_empty_medal_events_give_no_profiles():
    assert build_country_profiles([]) == []


def test_aggregates_keep_input_order_and_default_zero_medals():
    athletes = [Athlete(code="Z"), Athlete(code="A"), Athlete(code="M")]
    events = [_event("gold", "A", "USA"), _event("silver", "A", "USA")]

    aggregates = build_athlete_aggregates(athletes, events, REFERENCE_DATE)

    assert [a.athlete_code for a in aggregates] == ["Z", "A", "M"]
    assert [a.medal_count for a in aggregates] == [0, 2, 0]


def test_aggregates_of_empty_input():
    assert build_athlete_aggregates([], [], REFERENCE_DATE) == []


def test_country_prefers_medal_record():
    athletes = [
        Athlete(code="A1", country_code="ROC", country_name="Old Name"),
        Athlete(code="A2", country_code="BRA", country_name="Brazil"),
    ]
    events = [
        _event("gold", "A1", "AIN", name="Individual Neutral Athletes"),
        _event("gold", "A1", "XYZ", name="Second Country"),
    ]

    first, second = build_athlete_aggregates(athletes, events, REFERENCE_DATE)

    assert (first.country_code, first.country_name) == ("AIN", "Individual Neutral Athletes")
    assert (second.country_code, second.country_name) == ("BRA", "Brazil")


def test_aggregate_age_is_none_without_birth_date():
    [aggregate] = build_athlete_aggregates([Athlete(code="A1")], [], REFERENCE_DATE)

    assert aggregate.age_years is None
    assert aggregate.discipline == "Unknown"


def test_run_pipeline_counts_unmatched_events(athlete_rows, medal_rows):
    athletes = normalize_athletes(athlete_rows[:1])
    events = normalize_medal_events(medal_rows)

    result = run_pipeline(athletes, events, REFERENCE_DATE)

    assert result.unmatched_medal_events == 1
    assert result.country_profiles[0].total == 2
    assert [a.medal_count for a in result.athlete_aggregates] == [1]
    assert result.athlete_aggregates[0].age_years == 23


def test_pipeline_is_deterministic(athlete_rows, medal_rows):
    athletes = normalize_athletes(athlete_rows)
    events = normalize_medal_events(medal_rows)

    assert run_pipeline(athletes, events, REFERENCE_DATE) == run_pipeline(athletes, events, REFERENCE_DATE)
