import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sponsorscope.schemas import (
    AvailableRoutesResponse,
    CompanyProfileResponse,
    ErrorResponse,
    HealthResponse,
    SponsorshipCheckResponse,
)
from sponsorscope.exceptions import StoreConnectionError, StoreError
from sponsorscope.lookup.service import SponsorLookupService

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_INFO = {
    "message": "Sponsorscope API - 100% Accurate UK Sponsorship Verification",
    "status": "active",
    "data_integrity": "100% Official UK Government Data",
    "features": [
        "Sponsorship verification using official records",
        "Visa route information from licensed sponsors",
        "Company profile based on government data",
        "Geographic coverage analysis",
        "License type and rating details",
    ],
    "endpoints": {
        "check_sponsorship": "GET /api/check-sponsorship/:companyName",
        "company_profile": "GET /api/company-profile/:companyName",
        "available_routes": "GET /api/available-routes",
        "health_check": "GET /health",
    },
}


def get_lookup_service(request: Request) -> SponsorLookupService:
    """Resolve the service built at startup; fails if the register never connected."""
    service = getattr(request.app.state, "lookup_service", None)
    if service is None:
        raise StoreConnectionError("Sponsor register database is not connected")
    return service


@router.get("/")
def service_info():
    """Static capability document."""
    return SERVICE_INFO


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Register unreachable"}},
)
def health_check(request: Request):
    try:
        return get_lookup_service(request).health_check()
    except StoreError as e:
        logger.error("Health check failed: %s", e.message)
        return JSONResponse(status_code=500, content={"status": "unhealthy", "error": e.message})


@router.get(
    "/api/check-sponsorship/{company_name}",
    response_model=SponsorshipCheckResponse,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def check_sponsorship(company_name: str, service: SponsorLookupService = Depends(get_lookup_service)):
    """Summarise up to ten register entries whose name contains ``company_name``."""
    return service.search_sponsorship(company_name)


@router.get(
    "/api/company-profile/{company_name}",
    response_model=CompanyProfileResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def company_profile(company_name: str, service: SponsorLookupService = Depends(get_lookup_service)):
    """Profile every register entity whose name contains ``company_name``."""
    return service.get_company_profile(company_name)


@router.get(
    "/api/available-routes",
    response_model=AvailableRoutesResponse,
    responses={500: {"model": ErrorResponse}},
)
def available_routes(service: SponsorLookupService = Depends(get_lookup_service)):
    return service.list_available_routes()
