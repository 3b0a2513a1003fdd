# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Message creation service.

Stores a message on a bucket and records a MESSAGE event for it. The
admin notification dispatcher creates its messages here as well, with
``skip_event_tracking`` set so those messages are not tracked and cannot
trigger another admin notification.

Example:
    >>> service = MessagesService(get_session, EventTrackingService(recorder))
    >>> created = await service.create_message(
    ...     MessageCreateRequest(bucket_id=bucket_id, title="Hello", sender_user_id=user_id)
    ... )
"""

import logging

from zentik.infrastructure.database.connection import DatabaseError, SessionFactory
from zentik.infrastructure.database.models.base import generate_uuid
from zentik.infrastructure.database.models.message import Message
from zentik.infrastructure.events.recorder import EventRecorderError
from zentik.infrastructure.events.tracking import EventTrackingService
from zentik.infrastructure.notifications.messaging import CreatedMessage, MessageCreateRequest

logger = logging.getLogger(__name__)


class MessagesService:
    """Creates messages on buckets.

    Attributes:
        _session_factory: Opens the session a message is stored in.
        _tracking: Records MESSAGE events, if configured.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        tracking: EventTrackingService | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session_factory: Async context manager factory yielding a
                session that commits on exit.
            tracking: Event tracking helpers. Without it no events are
                recorded.
        """
        self._session_factory = session_factory
        self._tracking = tracking

    async def create_message(self, request: MessageCreateRequest) -> CreatedMessage:
        """Store one message and track it unless asked not to.

        Args:
            request: Message to create.

        Returns:
            Id of the stored message.

        Raises:
            DatabaseError: If the message could not be stored.
        """
        message_id = generate_uuid()

        async with self._session_factory() as session:
            session.add(
                Message(
                    id=message_id,
                    bucket_id=request.bucket_id,
                    title=request.title,
                    body=request.body,
                    delivery_type=request.delivery_type,
                    recipient_user_ids=list(request.recipient_user_ids) or None,
                    created_by=request.sender_user_id,
                )
            )

        logger.debug(
            "Created message %s on bucket %s for %d recipient(s)",
            message_id,
            request.bucket_id,
            len(request.recipient_user_ids),
        )

        if not request.skip_event_tracking and self._tracking is not None:
            # Tracking is telemetry; the message is already stored
            try:
                await self._tracking.track_message(request.sender_user_id, request.bucket_id)
            except (EventRecorderError, DatabaseError) as e:
                logger.warning("Failed to track message %s: %s", message_id, str(e))

        return CreatedMessage(id=message_id)
