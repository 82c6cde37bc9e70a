"""
app/main.py

FastAPI application factory for the CSV validation service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_log_level
from app.schemas.csv_validation import HealthResponse


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _configure_logging()

    application = FastAPI(
        title="CSV Sensei Validation API",
        version="1.0.0",
    )

    from app.api.routers import csv_validation_router

    application.include_router(csv_validation_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok")

    logging.getLogger(__name__).info("Validation API configured")
    return application


app = create_app()
