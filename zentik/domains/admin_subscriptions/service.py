# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin subscription service.

Each administrator has at most one subscription holding the set of event
types they want to be notified about. Subscribing again replaces that
set: writes go through a single ``INSERT ... ON CONFLICT (user_id) DO
UPDATE`` so concurrent subscribe calls for the same administrator leave
exactly one row behind, holding whichever set was written last.

Example:
    >>> service = AdminSubscriptionService(db)
    >>> await service.subscribe(admin_id, [EventType.LOGIN, EventType.LOGOUT])
    >>> await service.subscribe(admin_id, [EventType.LOGIN])  # replaces
"""

import logging
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from zentik.infrastructure.database.models.admin_subscription import AdminSubscription
from zentik.infrastructure.database.models.base import generate_uuid
from zentik.infrastructure.database.models.event import EventType
from zentik.infrastructure.database.models.user import User
from zentik.models.admin_subscription import AdminSubscriptionResponse

logger = logging.getLogger(__name__)


class AdminSubscriptionError(Exception):
    """Base exception for admin subscription errors."""

    pass


class SubscriptionNotFoundError(AdminSubscriptionError):
    """Raised when a subscription is not found."""

    pass


class SubscriptionForbiddenError(AdminSubscriptionError):
    """Raised when a non-administrator tries to subscribe."""

    pass


class InvalidEventTypesError(AdminSubscriptionError):
    """Raised when a subscription names an unknown event type."""

    pass


def normalize_event_types(event_types: Iterable[EventType | str]) -> list[str]:
    """Validate event types and drop duplicates, keeping first occurrences.

    Raises:
        InvalidEventTypesError: If a value is not a known event type.
    """
    normalized: list[str] = []
    for event_type in event_types:
        try:
            normalized.append(EventType(event_type).value)
        except ValueError as e:
            raise InvalidEventTypesError(f"Unknown event type: {event_type!r}") from e
    return list(dict.fromkeys(normalized))


class AdminSubscriptionService:
    """Service for managing admin subscriptions.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the service.

        Args:
            db: Async database session.
        """
        self._db = db

    async def subscribe(
        self,
        operator_id: str,
        event_types: Iterable[EventType | str],
    ) -> AdminSubscriptionResponse:
        """Create or replace the subscription of an administrator.

        Args:
            operator_id: Subscribing user.
            event_types: Event types to subscribe to.

        Returns:
            The stored subscription.

        Raises:
            SubscriptionForbiddenError: If the user is not an administrator.
            InvalidEventTypesError: If an event type is unknown.
        """
        types = normalize_event_types(event_types)

        user = await self._db.get(User, operator_id)
        if user is None or not user.is_admin:
            raise SubscriptionForbiddenError("Only admin users can create subscriptions")

        stmt = insert(AdminSubscription).values(
            id=generate_uuid(),
            user_id=operator_id,
            event_types=types,
        )
        stmt = (
            stmt.on_conflict_do_update(
                index_elements=[AdminSubscription.user_id],
                set_={
                    "event_types": stmt.excluded.event_types,
                    "updated_at": func.now(),
                },
            )
            .returning(AdminSubscription)
            .execution_options(populate_existing=True)
        )

        result = await self._db.execute(stmt)
        subscription = result.scalar_one()
        await self._db.commit()

        logger.info(
            "Admin subscription stored for user %s: %s",
            operator_id,
            ", ".join(types) or "(none)",
        )
        return AdminSubscriptionResponse.model_validate(subscription)

    async def get(self, operator_id: str) -> AdminSubscriptionResponse | None:
        """Get the subscription of an administrator, if any."""
        result = await self._db.execute(
            select(AdminSubscription).where(AdminSubscription.user_id == operator_id)
        )
        subscription = result.scalar_one_or_none()
        if subscription is None:
            return None
        return AdminSubscriptionResponse.model_validate(subscription)

    async def get_by_id(self, subscription_id: str) -> AdminSubscriptionResponse:
        """Get a subscription by ID.

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID.
        """
        subscription = await self._get_model(subscription_id)
        return AdminSubscriptionResponse.model_validate(subscription)

    async def list_subscriptions(self) -> list[AdminSubscriptionResponse]:
        """List all subscriptions, newest first."""
        result = await self._db.execute(
            select(AdminSubscription).order_by(AdminSubscription.created_at.desc())
        )
        return [AdminSubscriptionResponse.model_validate(s) for s in result.scalars().all()]

    async def update(
        self,
        subscription_id: str,
        event_types: Iterable[EventType | str],
    ) -> AdminSubscriptionResponse:
        """Replace the event types of a subscription.

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID.
            InvalidEventTypesError: If an event type is unknown.
        """
        types = normalize_event_types(event_types)
        subscription = await self._get_model(subscription_id)

        subscription.event_types = types
        await self._db.commit()
        await self._db.refresh(subscription)

        logger.info("Admin subscription updated: %s - %s", subscription_id, ", ".join(types))
        return AdminSubscriptionResponse.model_validate(subscription)

    async def unsubscribe(self, subscription_id: str) -> None:
        """Delete a subscription.

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID.
        """
        subscription = await self._get_model(subscription_id)
        await self._db.delete(subscription)
        await self._db.commit()

        logger.info("Admin subscription removed: %s", subscription_id)

    remove = unsubscribe

    async def _get_model(self, subscription_id: str) -> AdminSubscription:
        subscription = await self._db.get(AdminSubscription, subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(f"Admin subscription {subscription_id} not found")
        return subscription
