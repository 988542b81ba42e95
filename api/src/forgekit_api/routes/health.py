"""Health check endpoints."""

import asyncio
from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

from forgekit_api.dependencies import check_database_health
from forgekit_core import __version__

router = APIRouter()


class HealthStatus(BaseModel):
    """Health check response model."""

    status: Literal["healthy", "unhealthy", "degraded"]
    timestamp: datetime
    version: str
    checks: dict[str, bool] = {}


class ReadinessStatus(BaseModel):
    """Readiness check response model."""

    ready: bool
    timestamp: datetime
    services: dict[str, bool] = {}


async def _check_blob_store(request: Request) -> bool:
    blob_store = getattr(request.app.state, "blob_store", None)
    if blob_store is None:
        return False
    return await blob_store.health_check()


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """
    Basic health check endpoint.

    Only reports that the API process is up; used for liveness probes.
    """
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
        checks={"api": True},
    )


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_check(request: Request) -> ReadinessStatus:
    """
    Readiness check endpoint.

    The database must answer for the API to be ready. MinIO is reported
    but only affects image uploads.
    """
    results = await asyncio.gather(
        check_database_health(getattr(request.app.state, "engine", None)),
        _check_blob_store(request),
        return_exceptions=True,
    )

    services = {
        "database": results[0] if isinstance(results[0], bool) else False,
        "minio": results[1] if isinstance(results[1], bool) else False,
    }

    return ReadinessStatus(
        ready=services["database"],
        timestamp=datetime.now(UTC),
        services=services,
    )


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "name": "Forgekit API",
        "version": __version__,
        "description": "Backend for no-code websites: per-project data APIs built from modules",
        "docs": "/docs",
    }
