# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the Zentik API and
wires the event pipeline: one EventRecorder per process, with the admin
notification dispatcher registered as a listener at startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zentik import __version__
from zentik.api.middleware.auth import AuthMiddleware
from zentik.api.routes import health
from zentik.api.v1 import router as v1_router
from zentik.core.config import get_settings
from zentik.domains.admin_subscriptions.resolver import SubscriberResolver
from zentik.domains.messages.service import MessagesService
from zentik.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    get_session,
    init_database,
)
from zentik.infrastructure.events.recorder import get_event_recorder, reset_event_recorder
from zentik.infrastructure.events.tracking import EventTrackingService
from zentik.infrastructure.notifications.channel import AdminChannelCache
from zentik.infrastructure.notifications.dispatcher import AdminNotificationDispatcher
from zentik.infrastructure.notifications.enricher import ContextEnricher
from zentik.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.
    Initializes and cleans up:
    - Logging
    - Database connections
    - Event recorder and admin notification dispatcher

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info("Starting Zentik API (environment=%s)", settings.environment)

    # =========================================================================
    # Startup
    # =========================================================================

    try:
        await init_database(settings)
        logger.info("Database connection initialized")
    except DatabaseError as e:
        logger.warning("Failed to initialize database connection: %s", str(e))

    recorder = get_event_recorder()
    tracking = EventTrackingService(recorder)

    dispatcher = AdminNotificationDispatcher(
        resolver=SubscriberResolver(get_session),
        channel_cache=AdminChannelCache(get_session),
        enricher=ContextEnricher(get_session),
        messaging=MessagesService(get_session, tracking),
        separator=settings.admin_notifications.body_separator,
        enabled=settings.admin_notifications.enabled,
    )
    dispatcher.register(recorder)

    app.state.event_recorder = recorder
    app.state.event_tracking = tracking
    app.state.admin_dispatcher = dispatcher

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    # Let running fan-outs finish before the pool goes away
    await dispatcher.drain()
    reset_event_recorder()

    await close_database()
    logger.info("Shutting down Zentik API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Zentik API",
        description="Event recording and admin notifications",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        # This prevents 307 redirects that lose Authorization headers
        redirect_slashes=False,
    )

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    app.add_middleware(AuthMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
