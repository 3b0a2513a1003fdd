# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    admin_subscriptions: Admin event subscription endpoints.
    events: Recorded event listing endpoints.
"""

from fastapi import APIRouter

from zentik.api.v1 import admin_subscriptions, events

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(
    admin_subscriptions.router,
    prefix="/admin-subscriptions",
    tags=["Admin Subscriptions"],
)
router.include_router(events.router, prefix="/events", tags=["Events"])

__all__ = ["router"]
