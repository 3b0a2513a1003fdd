# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Display details for admin notifications.

The enricher turns the bare ids of an event into something readable:
the acting user's name and email, the device a device event refers to,
the provider used for an OAuth login, and the recipient and failure
reason an email or delivery event carries in its payload. Every lookup
is read-only and optional; a missing row or a failing query just leaves
the field empty.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from zentik.infrastructure.database.connection import DatabaseError, SessionFactory
from zentik.infrastructure.database.models.user import User, UserDevice, UserSession
from zentik.infrastructure.events.recorder import EventData
from zentik.infrastructure.events.types import EventRegistry, EventTheme, EventType

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EventContext:
    """Details available for formatting one event.

    Attributes:
        actor_id: Acting user id, copied from the event.
        actor_name: Acting user's full name, or username.
        actor_email: Acting user's email.
        provider: OAuth provider used to log in.
        device_platform: Platform of the device the event refers to.
        device_name: Name of that device.
        device_model: Model of that device.
        object_id: Primary subject id, copied from the event.
        target_id: Secondary subject id, copied from the event.
        recipient: Address an email event was sent to.
        subject: Subject of that email.
        error: Failure reason carried by the event.
    """

    actor_id: str | None = None
    actor_name: str | None = None
    actor_email: str | None = None
    provider: str | None = None
    device_platform: str | None = None
    device_name: str | None = None
    device_model: str | None = None
    object_id: str | None = None
    target_id: str | None = None
    recipient: str | None = None
    subject: str | None = None
    error: str | None = None


class ContextEnricher:
    """Looks up display details for events.

    Attributes:
        _session_factory: Opens a session per lookup.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def enrich(self, event: EventData) -> EventContext:
        """Collect the display details of an event.

        Args:
            event: Recorded event.

        Returns:
            Context with every field that could be found.
        """
        actor: User | None = None
        device: UserDevice | None = None
        provider: str | None = None
        info = event.additional_info or {}
        is_email = EventRegistry.get_theme(event.type) == EventTheme.EMAIL

        if event.user_id:
            actor = await self._lookup("user", event.id, lambda s: s.get(User, event.user_id))

        if event.target_id and EventRegistry.is_device_event(event.type):
            device = await self._lookup(
                "device", event.id, lambda s: s.get(UserDevice, event.target_id)
            )

        if event.type == EventType.LOGIN_OAUTH:
            provider = info.get("provider")
            if not provider and event.user_id:
                provider = await self._lookup(
                    "login provider", event.id, lambda s: self._latest_provider(s, event.user_id)
                )
        elif is_email:
            provider = info.get("provider")

        return EventContext(
            actor_id=event.user_id,
            actor_name=actor.full_name if actor else None,
            actor_email=actor.email if actor else None,
            provider=provider,
            device_platform=_enum_value(device.platform) if device else None,
            device_name=device.device_name if device else None,
            device_model=device.device_model if device else None,
            object_id=event.object_id,
            target_id=event.target_id,
            recipient=info.get("to") if is_email else None,
            subject=info.get("subject") if is_email else None,
            error=info.get("error") or info.get("reason"),
        )

    async def _lookup(
        self,
        what: str,
        event_id: str,
        query: Callable[[AsyncSession], Awaitable[T]],
    ) -> T | None:
        try:
            async with self._session_factory() as session:
                return await query(session)
        except (SQLAlchemyError, DatabaseError) as e:
            logger.warning("Failed to look up %s for event %s: %s", what, event_id, str(e))
            return None

    @staticmethod
    async def _latest_provider(session: AsyncSession, user_id: str) -> str | None:
        result = await session.execute(
            select(UserSession.login_provider)
            .where(
                UserSession.user_id == user_id,
                UserSession.login_provider.is_not(None),
            )
            .order_by(UserSession.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()


def _enum_value(value: object) -> str:
    return getattr(value, "value", None) or str(value)
