# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Resolve which administrators should hear about an event type.

Subscriptions and privileges are read separately: first the operators
subscribed to the type, then their current roles. A user demoted after
subscribing is therefore dropped at the next event.
"""

import logging

from sqlalchemy import select

from zentik.infrastructure.database.connection import SessionFactory
from zentik.infrastructure.database.models.admin_subscription import AdminSubscription
from zentik.infrastructure.database.models.event import EventType
from zentik.infrastructure.database.models.user import User, UserRole

logger = logging.getLogger(__name__)


class SubscriberResolver:
    """Finds subscribed administrators for an event type.

    Attributes:
        _session_factory: Opens the session used for both lookups.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def resolve(self, event_type: EventType | str) -> list[str]:
        """List the ids of administrators subscribed to an event type.

        Args:
            event_type: Event type (enum member or raw value).

        Returns:
            Distinct user ids, empty when nobody qualifies.
        """
        value = getattr(event_type, "value", event_type)

        async with self._session_factory() as session:
            result = await session.execute(
                select(AdminSubscription.user_id).where(
                    AdminSubscription.event_types.contains([value])
                )
            )
            subscriber_ids = list(dict.fromkeys(result.scalars().all()))
            if not subscriber_ids:
                return []

            result = await session.execute(
                select(User.id).where(
                    User.id.in_(subscriber_ids),
                    User.role == UserRole.ADMIN,
                )
            )
            admin_ids = set(result.scalars().all())

        recipients = [user_id for user_id in subscriber_ids if user_id in admin_ids]
        if len(recipients) < len(subscriber_ids):
            logger.debug(
                "Skipped %d subscriber(s) without admin role for %s",
                len(subscriber_ids) - len(recipients),
                value,
            )
        return recipients
