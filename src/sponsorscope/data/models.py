"""
ORM model and value type for the UK licensed sponsor register.

Column names follow the published Home Office CSV verbatim, so a table
loaded straight from the register (e.g. a hosted Postgres import) maps
without renaming.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sponsorscope.data.database import Base


REGISTER_COLUMNS = ("Organisation Name", "Town/City", "County", "Type & Rating", "Route")


@dataclass(frozen=True)
class SponsorRecord:
    """One row of the sponsor register, detached from any session."""

    organisation_name: str
    town_city: Optional[str] = None
    county: Optional[str] = None
    type_and_rating: Optional[str] = None
    route: Optional[str] = None


class SponsorshipCompany(Base):
    """A licensed sponsoring organisation as listed in the register."""

    __tablename__ = "sponsorship_companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organisation_name: Mapped[str] = mapped_column("Organisation Name", Text, index=True)
    town_city: Mapped[Optional[str]] = mapped_column("Town/City", Text)
    county: Mapped[Optional[str]] = mapped_column("County", Text)
    type_and_rating: Mapped[Optional[str]] = mapped_column("Type & Rating", Text)
    route: Mapped[Optional[str]] = mapped_column("Route", Text, index=True)

    def to_record(self) -> SponsorRecord:
        return SponsorRecord(
            organisation_name=self.organisation_name,
            town_city=self.town_city,
            county=self.county,
            type_and_rating=self.type_and_rating,
            route=self.route,
        )

    @classmethod
    def from_record(cls, record: SponsorRecord) -> "SponsorshipCompany":
        return cls(
            organisation_name=record.organisation_name,
            town_city=record.town_city,
            county=record.county,
            type_and_rating=record.type_and_rating,
            route=record.route,
        )

    def __repr__(self) -> str:
        return f"<SponsorshipCompany(name='{self.organisation_name}', route='{self.route}')>"
