# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Append-only event persistence.

EventStore writes exactly one row per append and never updates or deletes
events. The read side serves the administrative event listing.

Example:
    async with get_session() as session:
        store = EventStore(session)
        event = await store.append(EventType.LOGIN, user_id=user_id)
        events, total = await store.find_page(page=1, limit=20)
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from zentik.infrastructure.database.models.base import generate_uuid
from zentik.infrastructure.database.models.event import Event, EventType

logger = logging.getLogger(__name__)


class EventStore:
    """Persistence for Event rows.

    Attributes:
        _db: Async database session. The caller owns the transaction.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the store.

        Args:
            db: Async database session.
        """
        self._db = db

    async def append(
        self,
        event_type: EventType,
        user_id: str | None = None,
        object_id: str | None = None,
        target_id: str | None = None,
        additional_info: dict[str, Any] | None = None,
    ) -> Event:
        """Insert one event row.

        The id and creation timestamp are generated here so the returned
        row is complete before the transaction commits.

        Args:
            event_type: Event kind.
            user_id: Acting user.
            object_id: Primary subject id.
            target_id: Secondary subject id.
            additional_info: Type-specific context.

        Returns:
            The flushed Event row.
        """
        event = Event(
            id=generate_uuid(),
            type=event_type,
            user_id=user_id,
            object_id=object_id,
            target_id=target_id,
            additional_info=additional_info,
            created_at=datetime.now(timezone.utc),
        )
        self._db.add(event)
        await self._db.flush()

        logger.debug("Stored event %s (%s)", event.id, event_type.value)
        return event

    async def find_page(
        self,
        page: int = 1,
        limit: int = 20,
        event_type: EventType | None = None,
        user_id: str | None = None,
        object_id: str | None = None,
        target_id: str | None = None,
    ) -> tuple[list[Event], int]:
        """List events newest first with optional filters.

        Args:
            page: 1-based page number.
            limit: Page size.
            event_type: Filter by type.
            user_id: Filter by acting user.
            object_id: Filter by primary subject.
            target_id: Filter by secondary subject.

        Returns:
            Tuple of (events on the page, total matching events).
        """
        conditions = []
        if event_type is not None:
            conditions.append(Event.type == event_type)
        if user_id is not None:
            conditions.append(Event.user_id == user_id)
        if object_id is not None:
            conditions.append(Event.object_id == object_id)
        if target_id is not None:
            conditions.append(Event.target_id == target_id)

        count_result = await self._db.execute(
            select(func.count()).select_from(Event).where(*conditions)
        )
        total = count_result.scalar() or 0

        result = await self._db.execute(
            select(Event)
            .where(*conditions)
            .order_by(Event.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def find_by_type(self, event_type: EventType) -> list[Event]:
        """List all events of a type, newest first."""
        return await self._find_where(Event.type == event_type)

    async def find_by_user_id(self, user_id: str) -> list[Event]:
        """List all events performed by a user, newest first."""
        return await self._find_where(Event.user_id == user_id)

    async def find_by_object_id(self, object_id: str) -> list[Event]:
        """List all events about an object, newest first."""
        return await self._find_where(Event.object_id == object_id)

    async def count(self) -> int:
        """Count all stored events."""
        result = await self._db.execute(select(func.count()).select_from(Event))
        return result.scalar() or 0

    async def _find_where(self, condition: Any) -> list[Event]:
        result = await self._db.execute(
            select(Event).where(condition).order_by(Event.created_at.desc())
        )
        return list(result.scalars().all())
