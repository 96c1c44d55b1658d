import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from sponsorscope.api.routes import router
from sponsorscope.config import Settings, settings
from sponsorscope.data.database import create_db_engine, create_session_factory
from sponsorscope.exceptions import (
    InvalidInputError,
    SponsorNotFoundError,
    StoreConnectionError,
    StoreError,
)
from sponsorscope.logging_config import setup_logging
from sponsorscope.lookup.service import SponsorLookupService

logger = logging.getLogger(__name__)


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def _not_found_handler(request: Request, exc: SponsorNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": exc.message, "suggestion": exc.suggestion},
    )


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Database error on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=500,
        content={"error": "Database query failed", "details": exc.message},
    )


def _log_banner(app_settings: Settings, service: Optional[SponsorLookupService]) -> None:
    logger.info("Sponsorscope server started")
    logger.info("Port: %s", app_settings.api.port)
    logger.info("Data: %s", app_settings.sponsor_register.data_source)
    if service is None:
        logger.warning("Register database offline; lookups will return 500")
        return
    try:
        logger.info("Companies: %d licensed sponsors", service.health_check().total_companies)
    except StoreError as e:
        logger.warning("Could not count register rows: %s", e.message)


def create_app(
    app_settings: Optional[Settings] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        app_settings: Configuration; defaults to the environment-loaded settings.
        session_factory: Pre-built session factory (tests). When omitted the
            engine is created from ``app_settings.database.url`` at startup.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if app.state.lookup_service is None:
            try:
                engine = create_db_engine(app_settings.database.url)
                app.state.lookup_service = SponsorLookupService(
                    create_session_factory(engine), app_settings.sponsor_register
                )
            except StoreConnectionError as e:
                # Keep serving so /health can report the outage.
                logger.error("Failed to connect to register database: %s", e.message)

        _log_banner(app_settings, app.state.lookup_service)
        yield

        if engine is not None:
            engine.dispose()
            app.state.lookup_service = None

    app = FastAPI(
        title="Sponsorscope API",
        description="Lookups against the UK Government register of licensed visa sponsors.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.lookup_service = (
        SponsorLookupService(session_factory, app_settings.sponsor_register) if session_factory else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidInputError, _invalid_input_handler)
    app.add_exception_handler(SponsorNotFoundError, _not_found_handler)
    app.add_exception_handler(StoreError, _store_error_handler)

    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    settings.setup()
    setup_logging(level=settings.logging.level, log_file=settings.logging.file)
    uvicorn.run(
        "sponsorscope.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
