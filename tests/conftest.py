"""
Shared fixtures. Every test runs against SQLite in-memory — no hosted
register required.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sponsorscope.config import RegisterSettings
from sponsorscope.data.database import Base
from sponsorscope.data.models import SponsorRecord, SponsorshipCompany
from sponsorscope.data.repository import SponsorRepository
from sponsorscope.lookup.service import SponsorLookupService


@pytest.fixture
def acme_rows():
    """Two Acme entities in Leeds, both A-rated Skilled Worker sponsors."""
    return [
        SponsorRecord("Acme Ltd", "Leeds", "West Yorkshire", "Worker (A rating)", "Skilled Worker"),
        SponsorRecord("Acme Corp", "Leeds", "", "Worker (A rating)", "Skilled Worker"),
    ]


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with the register table."""
    eng = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def session(session_factory):
    """A session rolled back after each test."""
    sess = session_factory()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def repo(session):
    return SponsorRepository(session)


@pytest.fixture
def seed(session_factory):
    """Insert and commit register rows: ``seed(record, ...)``."""
    def _seed(*records: SponsorRecord) -> None:
        with session_factory() as sess:
            sess.add_all(SponsorshipCompany.from_record(r) for r in records)
            sess.commit()
    return _seed


@pytest.fixture
def service(session_factory):
    return SponsorLookupService(session_factory, RegisterSettings())
