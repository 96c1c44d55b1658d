"""Sponsor lookup — result summarising and the request-level service."""

from sponsorscope.lookup.analysis import (
    LabelRule, LocationCap, SummaryAggregate,
    CAPACITY_RULES, SCALE_RULES, location_string, summarize,
)
from sponsorscope.lookup.service import SponsorLookupService

__all__ = [
    "LabelRule", "LocationCap", "SummaryAggregate",
    "CAPACITY_RULES", "SCALE_RULES", "location_string", "summarize",
    "SponsorLookupService",
]
