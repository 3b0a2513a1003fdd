# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from zentik import __version__
from zentik.core.config import get_settings
from zentik.infrastructure.database.connection import check_database_connection

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    database: bool = Field(description="Whether the database is reachable")
    pending_admin_notifications: int = Field(description="Admin fan-outs still running")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness information."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=get_settings().environment,
        uptime_seconds=int(time.time() - _server_start_time),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Readiness: the database answers."""
    database_ok = await check_database_connection()
    if not database_ok:
        logger.warning("Readiness check failed: database unreachable")

    dispatcher = getattr(request.app.state, "admin_dispatcher", None)
    return ReadinessResponse(
        ready=database_ok,
        database=database_ok,
        pending_admin_notifications=dispatcher.pending_count if dispatcher else 0,
    )
