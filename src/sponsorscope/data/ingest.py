"""
Load the Home Office "Register of licensed sponsors: workers" CSV.

The hosted table this service reads was populated from that CSV; this
module does the same for a local or self-managed database.
"""

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence

import pandas as pd
from sqlalchemy.engine import Engine

from sponsorscope.config import Settings, settings
from sponsorscope.data.database import create_db_engine, create_session_factory, init_db
from sponsorscope.data.models import REGISTER_COLUMNS, SponsorRecord
from sponsorscope.data.repository import SponsorRepository
from sponsorscope.exceptions import RegisterFormatError, RegisterReadError, SponsorscopeError
from sponsorscope.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def _clean(value: Any) -> Optional[str]:
    """Trim a CSV cell; blanks and NaN become None."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def read_register_csv(path: str | Path) -> list[SponsorRecord]:
    """
    Parse a register CSV into SponsorRecords.

    Rows without an organisation name are dropped.

    Raises:
        RegisterReadError: if the file is missing, empty, undecodable or not CSV.
        RegisterFormatError: if any of the five register columns is missing.
    """
    try:
        df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise RegisterReadError(path=str(path), reason=str(e)) from e
    df.columns = [str(c).strip() for c in df.columns]

    missing = [col for col in REGISTER_COLUMNS if col not in df.columns]
    if missing:
        raise RegisterFormatError(path=str(path), missing=missing)

    records = []
    skipped = 0
    for row in df[list(REGISTER_COLUMNS)].itertuples(index=False, name=None):
        name, town, county, type_rating, route = (_clean(v) for v in row)
        if not name:
            skipped += 1
            continue
        records.append(SponsorRecord(
            organisation_name=name,
            town_city=town,
            county=county,
            type_and_rating=type_rating,
            route=route,
        ))

    logger.info("Parsed %d register rows from %s (%d skipped)", len(records), path, skipped)
    return records


def ingest_register(path: str | Path, engine: Engine, replace: bool = False) -> int:
    """
    Create the register table if needed and bulk load a CSV into it.

    Args:
        path: Register CSV file.
        engine: Target database engine.
        replace: Delete existing rows before loading.

    Returns:
        Number of rows written.
    """
    records = read_register_csv(path)
    init_db(engine=engine)

    session_factory = create_session_factory(engine)
    with session_factory() as session:
        repo = SponsorRepository(session)
        if replace:
            removed = repo.clear()
            logger.info("Cleared %d existing register rows", removed)
        written = repo.add_companies(records)
        session.commit()

    logger.info("Loaded %d sponsors into the register table", written)
    return written


def main(argv: Optional[Sequence[str]] = None, app_settings: Optional[Settings] = None) -> int:
    """Command-line entry point. Returns a process exit code."""
    parser = argparse.ArgumentParser(description="Load the sponsor register CSV into the database.")
    parser.add_argument("csv_path", help="Register CSV downloaded from gov.uk")
    parser.add_argument("--replace", action="store_true", help="Delete existing rows first")
    args = parser.parse_args(argv)

    app_settings = app_settings or settings
    app_settings.setup()
    setup_logging(level=app_settings.logging.level, log_file=app_settings.logging.file)

    try:
        engine = create_db_engine(app_settings.database.url)
        written = ingest_register(args.csv_path, engine, replace=args.replace)
    except SponsorscopeError as e:
        logger.error("Ingestion failed: %s", e.message)
        return 1

    logger.info("Done: %d sponsors loaded into %s", written, app_settings.database.url.split("@")[-1])
    return 0
