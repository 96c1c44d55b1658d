"""
SponsorLookupService — the read path behind every HTTP endpoint.

Each operation opens one session, issues one query, shapes the rows
into a response model and closes the session. No state survives
between calls.
"""

from typing import Callable

from sqlalchemy.orm import Session

from sponsorscope.schemas import (
    AvailableRoutesResponse,
    CompanyProfile,
    CompanyProfileResponse,
    HealthResponse,
    LicenseDetails,
    OfficialData,
    ProfileEntity,
    SponsorMatch,
    SponsorshipCapabilities,
    SponsorshipCheckResponse,
    SponsorshipInsights,
    VerificationDetails,
)
from sponsorscope.config import RegisterSettings
from sponsorscope.data.models import SponsorRecord
from sponsorscope.data.repository import SponsorRepository
from sponsorscope.exceptions import InvalidInputError, SponsorNotFoundError
from sponsorscope.logging_config import get_logger
from sponsorscope.lookup.analysis import (
    CAPACITY_RULES,
    SCALE_RULES,
    LocationCap,
    location_string,
    summarize,
)

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 2

LISTED_STATUS = "Active Licensed Sponsor"
PROFILE_STATUS = "Verified Licensed Sponsor"
ENTITY_STATUS = "Active"
NO_MATCH_MESSAGE = "No licensed sponsors found with this name"
DISCLAIMER = "All data verified against official UK government records"


class SponsorLookupService:
    """
    Lookup-and-summarise operations over the sponsor register.

    Usage:
        service = SponsorLookupService(create_session_factory(), settings.sponsor_register)
        service.search_sponsorship("Acme")
    """

    def __init__(self, session_factory: Callable[[], Session], register: RegisterSettings):
        self.session_factory = session_factory
        self.register = register

    def _search(self, name_query: str, limit: int | None) -> list[SponsorRecord]:
        with self.session_factory() as session:
            return SponsorRepository(session).search_by_name(name_query, limit=limit)

    # --- Operations ---

    def search_sponsorship(self, name_query: str) -> SponsorshipCheckResponse:
        """
        Summarise up to ``register.search_limit`` sponsors whose name contains the query.

        Raises:
            InvalidInputError: query shorter than two characters after trimming.
            StoreQueryError: the register query failed.
        """
        company_name = name_query.strip()
        if len(company_name) < MIN_QUERY_LENGTH:
            raise InvalidInputError(company_name, min_length=MIN_QUERY_LENGTH)

        logger.info("Checking sponsorship for: %r", company_name)
        companies = self._search(company_name, limit=self.register.search_limit)

        if not companies:
            logger.info("No licensed sponsors match %r", company_name)
            return SponsorshipCheckResponse(
                company_search=company_name,
                matches_found=0,
                sponsorship_available=False,
                message=NO_MATCH_MESSAGE,
                data_source=self.register.data_source,
                verification_date=self.register.verified_on,
                last_verified=self.register.verified_on,
                accuracy=self.register.accuracy,
            )

        summary = summarize(companies, LocationCap.CAPPED, CAPACITY_RULES)
        result = SponsorshipCheckResponse(
            company_search=company_name,
            matches_found=len(companies),
            sponsorship_available=True,
            official_data=OfficialData(
                total_matching_companies=len(companies),
                companies=[
                    SponsorMatch(
                        name=c.organisation_name,
                        location=location_string(c),
                        license_type=c.type_and_rating,
                        route=c.route,
                        official_status=LISTED_STATUS,
                    )
                    for c in companies
                ],
            ),
            sponsorship_insights=SponsorshipInsights(
                routes_available=summary.routes,
                license_types=summary.license_types,
                geographic_coverage=summary.locations,
                sponsorship_capacity=summary.label,
                data_freshness=self.register.data_freshness,
            ),
            data_source=self.register.data_source,
            verification_date=self.register.verified_on,
            accuracy=self.register.accuracy,
            disclaimer=DISCLAIMER,
        )

        logger.info("Results for %r: %d official matches", company_name, len(companies))
        return result

    def get_company_profile(self, name_query: str) -> CompanyProfileResponse:
        """
        Profile every register entity whose name contains the query.

        Raises:
            SponsorNotFoundError: nothing matched.
            StoreQueryError: the register query failed.
        """
        company_name = name_query.strip()
        companies = self._search(company_name, limit=None)
        if not companies:
            raise SponsorNotFoundError(company_name)

        summary = summarize(companies, LocationCap.UNCAPPED, SCALE_RULES)
        return CompanyProfileResponse(
            search_query=company_name,
            official_status=PROFILE_STATUS,
            company_profile=CompanyProfile(
                total_entities=len(companies),
                entities=[
                    ProfileEntity(
                        legal_name=c.organisation_name,
                        office_location=location_string(c),
                        license_details=LicenseDetails(
                            type=c.type_and_rating,
                            route=c.route,
                            status=ENTITY_STATUS,
                        ),
                    )
                    for c in companies
                ],
            ),
            sponsorship_capabilities=SponsorshipCapabilities(
                available_routes=summary.routes,
                license_ratings=summary.license_types,
                geographic_presence=summary.locations,
                organization_scale=summary.label,
            ),
            verification_details=VerificationDetails(
                source="UK Government Home Office",
                register_type="Worker and Temporary Worker",
                last_updated=self.register.verified_on,
                data_confidence="100% Official",
            ),
        )

    def list_available_routes(self) -> AvailableRoutesResponse:
        """Distinct visa routes across the whole register, sorted ascending."""
        with self.session_factory() as session:
            routes = SponsorRepository(session).list_routes()

        unique_routes = sorted(set(routes))
        return AvailableRoutesResponse(
            total_routes_available=len(unique_routes),
            routes=unique_routes,
            source=self.register.data_source,
            data_freshness=self.register.data_freshness,
        )

    def health_check(self) -> HealthResponse:
        """
        Count register rows to prove the store is reachable.

        Raises:
            StoreQueryError: the count query failed.
        """
        with self.session_factory() as session:
            total = SponsorRepository(session).count_companies()

        return HealthResponse(
            status="healthy",
            database_connected=True,
            total_companies=total or 0,
            data_source=self.register.data_source,
            last_verified=self.register.verified_on,
            accuracy=self.register.accuracy,
        )
