# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin subscription API endpoints.

This module provides endpoints for administrators to choose which events
they are notified about:
- POST / - Create or replace the current administrator's subscription
- GET / - List all subscriptions
- GET /me - Get the current administrator's subscription
- GET /{subscription_id} - Get a subscription
- PUT /{subscription_id} - Replace the event types of a subscription
- DELETE /{subscription_id} - Delete a subscription

All endpoints require an administrator token.

Example:
    POST /api/v1/admin-subscriptions
    {
        "event_types": ["LOGIN", "DEVICE_REGISTER"]
    }
"""

import logging

from fastapi import APIRouter, HTTPException, status

from zentik.api.dependencies import DB, AdminUser
from zentik.domains.admin_subscriptions.service import (
    AdminSubscriptionService,
    InvalidEventTypesError,
    SubscriptionForbiddenError,
    SubscriptionNotFoundError,
)
from zentik.models.admin_subscription import (
    AdminSubscriptionRequest,
    AdminSubscriptionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(subscription_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Admin subscription {subscription_id} not found",
    )


@router.post(
    "",
    response_model=AdminSubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe",
    description="Create or replace the admin subscription of the current user.",
)
async def subscribe(
    data: AdminSubscriptionRequest,
    current_user: AdminUser,
    db: DB,
) -> AdminSubscriptionResponse:
    """Create or replace the current administrator's subscription.

    The stored role is checked again, so a token issued before a
    demotion cannot subscribe.
    """
    service = AdminSubscriptionService(db)

    try:
        return await service.subscribe(current_user.id, data.event_types)
    except SubscriptionForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidEventTypesError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get(
    "",
    response_model=list[AdminSubscriptionResponse],
    summary="List subscriptions",
)
async def list_subscriptions(
    current_user: AdminUser,
    db: DB,
) -> list[AdminSubscriptionResponse]:
    """List all admin subscriptions, newest first."""
    return await AdminSubscriptionService(db).list_subscriptions()


@router.get(
    "/me",
    response_model=AdminSubscriptionResponse | None,
    summary="Get my subscription",
)
async def get_my_subscription(
    current_user: AdminUser,
    db: DB,
) -> AdminSubscriptionResponse | None:
    """Get the current administrator's subscription, or null."""
    return await AdminSubscriptionService(db).get(current_user.id)


@router.get(
    "/{subscription_id}",
    response_model=AdminSubscriptionResponse,
    summary="Get subscription",
)
async def get_subscription(
    subscription_id: str,
    current_user: AdminUser,
    db: DB,
) -> AdminSubscriptionResponse:
    try:
        return await AdminSubscriptionService(db).get_by_id(subscription_id)
    except SubscriptionNotFoundError:
        raise _not_found(subscription_id)


@router.put(
    "/{subscription_id}",
    response_model=AdminSubscriptionResponse,
    summary="Update subscription",
)
async def update_subscription(
    subscription_id: str,
    data: AdminSubscriptionRequest,
    current_user: AdminUser,
    db: DB,
) -> AdminSubscriptionResponse:
    """Replace the event types of a subscription."""
    logger.info("Updating admin subscription %s by %s", subscription_id, current_user.id)

    try:
        return await AdminSubscriptionService(db).update(subscription_id, data.event_types)
    except SubscriptionNotFoundError:
        raise _not_found(subscription_id)
    except InvalidEventTypesError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete subscription",
)
async def delete_subscription(
    subscription_id: str,
    current_user: AdminUser,
    db: DB,
) -> None:
    logger.info("Deleting admin subscription %s by %s", subscription_id, current_user.id)

    try:
        await AdminSubscriptionService(db).unsubscribe(subscription_id)
    except SubscriptionNotFoundError:
        raise _not_found(subscription_id)
