"""GenieSugar FastAPI application."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from geniesugar import __version__
from geniesugar.config import settings, validate_secret_key
from geniesugar.database import close_database
from geniesugar.logging_config import get_logger, setup_logging
from geniesugar.middleware import CorrelationIdMiddleware
from geniesugar.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from geniesugar.routers import (
    alert_settings,
    auth,
    family_contacts,
    glucose,
    health,
)

setup_logging(
    log_format=settings.log_format,
    log_level=settings.log_level,
    service_name=settings.service_name,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Migrations are applied by `geniesugar-migrate` before the server starts
    validate_secret_key()
    logger.info("GenieSugar API started", version=__version__)

    yield

    logger.info("Shutting down GenieSugar API...")
    await close_database()
    logger.info("GenieSugar API shutdown complete")


app = FastAPI(
    title="GenieSugar API",
    description="Diabetes self-management API with glucose alerts",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Middleware (order matters: first added = last executed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(glucose.router)
app.include_router(alert_settings.router)
app.include_router(family_contacts.router)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": "GenieSugar API",
        "version": __version__,
        "docs": "/docs",
    }
