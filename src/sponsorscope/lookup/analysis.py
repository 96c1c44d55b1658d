"""
Summary statistics derived from one request's matched register rows.

Nothing here touches the store; every aggregate is a pure function of
the rows it is given.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from sponsorscope.data.models import SponsorRecord

NO_LOCATION = "Location not specified"
GEOGRAPHIC_COVERAGE_CAP = 5


class LocationCap(Enum):
    CAPPED = "capped"
    UNCAPPED = "uncapped"


@dataclass(frozen=True)
class LabelRule:
    """A label that applies when its predicate holds for the row set."""

    label: str
    applies: Callable[[Sequence[SponsorRecord]], bool]


# Evaluated top to bottom; the last rule that applies decides the label.
CAPACITY_RULES: tuple[LabelRule, ...] = (
    LabelRule("Standard", lambda rows: True),
    LabelRule("Multiple Entities", lambda rows: len(rows) > 5),
    LabelRule(
        "A-Rated Sponsor",
        lambda rows: any("A rating" in (r.type_and_rating or "") for r in rows),
    ),
)

SCALE_RULES: tuple[LabelRule, ...] = (
    LabelRule("Single Entity", lambda rows: True),
    LabelRule("Multiple Entities", lambda rows: len(rows) > 1),
    LabelRule("Large Organization", lambda rows: len(rows) > 5),
)


@dataclass(frozen=True)
class SummaryAggregate:
    routes: list[str]
    license_types: list[str]
    locations: list[str]
    label: str


def location_string(record: SponsorRecord) -> str:
    """'Town, County', whichever half exists, or the not-specified marker."""
    town = record.town_city or ""
    county = record.county or ""
    if town and county:
        return f"{town}, {county}"
    return town or county or NO_LOCATION


def _distinct(values: Iterable[Optional[str]]) -> list[str]:
    """Unique truthy values in first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def classify(rows: Sequence[SponsorRecord], rules: Sequence[LabelRule]) -> str:
    label = ""
    for rule in rules:
        if rule.applies(rows):
            label = rule.label
    return label


def summarize(
    rows: Sequence[SponsorRecord],
    location_cap: LocationCap,
    rules: Sequence[LabelRule],
) -> SummaryAggregate:
    """
    Build the SummaryAggregate for a result set.

    Args:
        rows: Matched register rows for this request.
        location_cap: CAPPED keeps the first five distinct locations.
        rules: CAPACITY_RULES (search summary) or SCALE_RULES (profile).
    """
    locations = _distinct(location_string(r) for r in rows)
    if location_cap is LocationCap.CAPPED:
        locations = locations[:GEOGRAPHIC_COVERAGE_CAP]

    return SummaryAggregate(
        routes=_distinct(r.route for r in rows),
        license_types=_distinct(r.type_and_rating for r in rows),
        locations=locations,
        label=classify(rows, rules),
    )
