from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


# --- Sponsorship check ---

class SponsorMatch(BaseModel):
    name: str
    location: str
    license_type: Optional[str]
    route: Optional[str]
    official_status: str


class OfficialData(BaseModel):
    total_matching_companies: int
    companies: List[SponsorMatch]


class SponsorshipInsights(BaseModel):
    routes_available: List[str]
    license_types: List[str]
    geographic_coverage: List[str] = Field(..., description="Up to five distinct sponsor locations.")
    sponsorship_capacity: str
    data_freshness: str


class SponsorshipCheckResponse(BaseModel):
    """Search summary for a company name. A miss is still a successful response."""
    company_search: str
    matches_found: int
    sponsorship_available: bool
    message: Optional[str] = None
    official_data: Optional[OfficialData] = None
    sponsorship_insights: Optional[SponsorshipInsights] = None
    data_source: str
    verification_date: str
    last_verified: Optional[str] = None
    accuracy: str
    disclaimer: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "company_search": "Acme",
                "matches_found": 1,
                "sponsorship_available": True,
                "official_data": {
                    "total_matching_companies": 1,
                    "companies": [{
                        "name": "Acme Ltd",
                        "location": "Leeds, West Yorkshire",
                        "license_type": "Worker (A rating)",
                        "route": "Skilled Worker",
                        "official_status": "Active Licensed Sponsor",
                    }],
                },
                "sponsorship_insights": {
                    "routes_available": ["Skilled Worker"],
                    "license_types": ["Worker (A rating)"],
                    "geographic_coverage": ["Leeds, West Yorkshire"],
                    "sponsorship_capacity": "A-Rated Sponsor",
                    "data_freshness": "November 7, 2025",
                },
                "data_source": "UK Government Licensed Sponsors Register",
                "verification_date": "2025-11-07",
                "accuracy": "100% official data",
                "disclaimer": "All data verified against official UK government records",
            }
        }
    )


# --- Company profile ---

class LicenseDetails(BaseModel):
    type: Optional[str]
    route: Optional[str]
    status: str


class ProfileEntity(BaseModel):
    legal_name: str
    office_location: str
    license_details: LicenseDetails


class CompanyProfile(BaseModel):
    total_entities: int
    entities: List[ProfileEntity]


class SponsorshipCapabilities(BaseModel):
    available_routes: List[str]
    license_ratings: List[str]
    geographic_presence: List[str]
    organization_scale: str


class VerificationDetails(BaseModel):
    source: str
    register_type: str
    last_updated: str
    data_confidence: str


class CompanyProfileResponse(BaseModel):
    """Every register entity matching a name, with uncapped capabilities."""
    search_query: str
    official_status: str
    company_profile: CompanyProfile
    sponsorship_capabilities: SponsorshipCapabilities
    verification_details: VerificationDetails


# --- Routes / health ---

class AvailableRoutesResponse(BaseModel):
    total_routes_available: int
    routes: List[str]
    source: str
    data_freshness: str


class HealthResponse(BaseModel):
    status: str
    database_connected: bool
    total_companies: int
    data_source: str
    last_verified: str
    accuracy: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response raised by the lookup endpoints."""
    error: str
    details: Optional[str] = None
    suggestion: Optional[str] = None
