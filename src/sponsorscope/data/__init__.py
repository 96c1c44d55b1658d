"""Data layer — database engine, ORM model, repository and register ingestion."""

from sponsorscope.data.database import Base, create_db_engine, create_session_factory, init_db
from sponsorscope.data.models import SponsorshipCompany, SponsorRecord, REGISTER_COLUMNS
from sponsorscope.data.repository import SponsorRepository

__all__ = [
    "Base", "create_db_engine", "create_session_factory", "init_db",
    "SponsorshipCompany", "SponsorRecord", "REGISTER_COLUMNS",
    "SponsorRepository",
]
