"""
Repository layer — read queries against the sponsor register.

Every SQLAlchemy failure is re-raised as StoreQueryError so callers
only ever see the project's own exception hierarchy.
"""

from typing import Iterable

from sqlalchemy import select, func, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sponsorscope.data.models import SponsorshipCompany, SponsorRecord
from sponsorscope.logging_config import get_logger
from sponsorscope.exceptions import StoreQueryError

logger = get_logger(__name__)


class SponsorRepository:
    """
    All database operations for the sponsor register.

    Usage:
        session_factory = create_session_factory()
        with session_factory() as session:
            repo = SponsorRepository(session)
            repo.search_by_name("Acme", limit=10)
    """

    def __init__(self, session: Session):
        self.session = session

    # --- Lookups ---

    def search_by_name(self, fragment: str, limit: int | None = None) -> list[SponsorRecord]:
        """
        Case-insensitive containment match on the organisation name.

        Rows come back in the store's default order. ``limit=None`` means
        no cap.
        """
        stmt = select(SponsorshipCompany).where(
            SponsorshipCompany.organisation_name.ilike(f"%{fragment}%")
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            return [row.to_record() for row in self.session.scalars(stmt)]
        except SQLAlchemyError as e:
            raise StoreQueryError(
                message=str(e),
                details={"operation": "search_by_name", "fragment": fragment},
            ) from e

    def list_routes(self) -> list[str]:
        """Route value of every row that has one (duplicates included)."""
        stmt = select(SponsorshipCompany.route).where(
            SponsorshipCompany.route.is_not(None),
            SponsorshipCompany.route != "",
        )
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError as e:
            raise StoreQueryError(message=str(e), details={"operation": "list_routes"}) from e

    def count_companies(self) -> int:
        """Exact number of register rows."""
        try:
            return self.session.scalar(select(func.count(SponsorshipCompany.id))) or 0
        except SQLAlchemyError as e:
            raise StoreQueryError(message=str(e), details={"operation": "count_companies"}) from e

    # --- Loading ---

    def add_companies(self, records: Iterable[SponsorRecord]) -> int:
        """Bulk insert register rows. Returns the number added."""
        rows = [SponsorshipCompany.from_record(r) for r in records]
        try:
            self.session.add_all(rows)
            self.session.flush()
        except SQLAlchemyError as e:
            raise StoreQueryError(message=str(e), details={"operation": "add_companies"}) from e
        return len(rows)

    def clear(self) -> int:
        """Delete every register row. Returns the number removed."""
        try:
            result = self.session.execute(delete(SponsorshipCompany))
        except SQLAlchemyError as e:
            raise StoreQueryError(message=str(e), details={"operation": "clear"}) from e
        return result.rowcount or 0
