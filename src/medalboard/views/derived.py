"""Per-chart view data derived from aggregation output and the active selection."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from medalboard.aggregation.schema import AthleteMedalAggregate, CountryProfile

OTHER_GROUP = "Other"

PROFILE_DIMENSIONS: Tuple[Tuple[str, str], ...] = (
    ("gold", "Gold"),
    ("silver", "Silver"),
    ("bronze", "Bronze"),
    ("total", "Total"),
    ("medalist_count", "Medalists"),
    ("discipline_count", "Disciplines"),
)


@dataclass(frozen=True)
class AxisDomain:
    low: int
    high: int


@dataclass(frozen=True)
class GroupedAthlete:
    athlete: AthleteMedalAggregate
    country_group: str


@dataclass
class CountryGrouping:
    """Medal-winning athletes with known age, labelled by top-N country or ``Other``."""

    rows: List[GroupedAthlete]
    top_countries: List[str]

    @property
    def legend(self) -> List[str]:
        return [*self.top_countries, OTHER_GROUP]


@dataclass
class ScatterView:
    rows: List[GroupedAthlete]
    legend: List[str]
    age_domain: Optional[AxisDomain]
    medal_domain: AxisDomain
    active_country: Optional[str] = None
    used_fallback_domain: bool = False


@dataclass
class ProfileView:
    rows: List[CountryProfile]
    axis_max: Dict[str, int]
    featured: Optional[CountryProfile]
    normalized: Dict[str, float] = field(default_factory=dict)
    active_country: Optional[str] = None
    used_fallback_domain: bool = False


@dataclass(frozen=True)
class CountryBar:
    profile: CountryProfile
    selected: bool = False
    dimmed: bool = False


@dataclass
class BarView:
    bars: List[CountryBar]
    max_total: int = 0
    active_country: Optional[str] = None


def group_top_countries(aggregates: Sequence[AthleteMedalAggregate], top_n: int = 4) -> CountryGrouping:
    """Keep athletes with an age and at least one medal; bucket all but the top countries.

    Countries are ranked by summed medal count over the kept rows. Ties keep
    the order in which countries were first met, not their code order.
    """
    kept = [agg for agg in aggregates if agg.age_years is not None and agg.medal_count > 0]

    totals: Dict[str, int] = {}
    for agg in kept:
        totals[agg.country_code] = totals.get(agg.country_code, 0) + agg.medal_count
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    top = [code for code, _ in ranked[:top_n]]
    top_set = set(top)

    rows = [GroupedAthlete(agg, agg.country_code if agg.country_code in top_set else OTHER_GROUP) for agg in kept]
    return CountryGrouping(rows=rows, top_countries=top)


def _scatter_domains(rows: Sequence[GroupedAthlete]) -> Tuple[Optional[AxisDomain], AxisDomain]:
    if not rows:
        return None, AxisDomain(1, 1)
    ages = [row.athlete.age_years for row in rows]
    medals = [row.athlete.medal_count for row in rows]
    return AxisDomain(min(ages), max(ages)), AxisDomain(1, max(medals))


def build_scatter_view(
    aggregates: Sequence[AthleteMedalAggregate],
    active_country: Optional[str] = None,
    top_n: int = 4,
) -> ScatterView:
    grouping = group_top_countries(aggregates, top_n=top_n)
    shown = grouping.rows
    if active_country is not None:
        shown = [row for row in grouping.rows if row.athlete.country_code == active_country]

    # An empty selection keeps the unfiltered axes instead of collapsing them.
    fallback = not shown and bool(grouping.rows)
    age_domain, medal_domain = _scatter_domains(grouping.rows if fallback else shown)
    return ScatterView(
        rows=shown,
        legend=grouping.legend,
        age_domain=age_domain,
        medal_domain=medal_domain,
        active_country=active_country,
        used_fallback_domain=fallback,
    )


def dimension_maxima(profiles: Sequence[CountryProfile]) -> Dict[str, int]:
    return {key: max((getattr(p, key) for p in profiles), default=0) for key, _ in PROFILE_DIMENSIONS}


def normalize_profile(profile: CountryProfile, maxima: Dict[str, int]) -> Dict[str, float]:
    """Express each dimension as a share of its maximum across all countries."""
    normalized: Dict[str, float] = {}
    for key, _ in PROFILE_DIMENSIONS:
        top = maxima.get(key, 0)
        normalized[key] = getattr(profile, key) / top if top > 0 else 0.0
    return normalized


def build_profile_view(profiles: Sequence[CountryProfile], active_country: Optional[str] = None) -> ProfileView:
    global_max = dimension_maxima(profiles)
    rows = list(profiles)
    if active_country is not None:
        rows = [p for p in profiles if p.country_code == active_country]

    fallback = not rows and bool(profiles)
    axis_max = global_max if fallback else dimension_maxima(rows)

    featured = rows[0] if rows else (profiles[0] if profiles else None)
    return ProfileView(
        rows=rows,
        axis_max=axis_max,
        featured=featured,
        normalized=normalize_profile(featured, global_max) if featured else {},
        active_country=active_country,
        used_fallback_domain=fallback,
    )


def build_bar_view(profiles: Sequence[CountryProfile], active_country: Optional[str] = None, limit: int = 20) -> BarView:
    leading = sorted(profiles, key=lambda p: p.total, reverse=True)[:limit]
    bars = [
        CountryBar(
            profile=p,
            selected=p.country_code == active_country,
            dimmed=active_country is not None and p.country_code != active_country,
        )
        for p in leading
    ]
    return BarView(bars=bars, max_total=max((p.total for p in leading), default=0), active_country=active_country)
