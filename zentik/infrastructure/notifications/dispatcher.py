# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin notification fan-out.

The dispatcher listens to every recorded event and, for events some
administrator subscribed to, posts exactly one message on the admin
bucket addressed to all of them.

Per event the steps run in a fixed order:
1. resolve the subscribed administrators (none -> stop)
2. resolve the admin bucket (none -> stop)
3. enrich the event with display details
4. format title and body
5. create one message with ``skip_event_tracking=True``

The work runs in a background task so the action that recorded the event
never waits for it. Failures are logged with the event id and dropped:
there is one attempt per event, no retry.

Example:
    dispatcher = AdminNotificationDispatcher(
        resolver=SubscriberResolver(get_session),
        channel_cache=AdminChannelCache(get_session),
        enricher=ContextEnricher(get_session),
        messaging=MessagesService(get_session),
    )
    dispatcher.register(get_event_recorder())
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from zentik.infrastructure.database.models.message import NotificationDeliveryType
from zentik.infrastructure.events.recorder import EventData, EventRecorder
from zentik.infrastructure.notifications.channel import AdminChannelCache
from zentik.infrastructure.notifications.enricher import ContextEnricher
from zentik.infrastructure.notifications.formatter import DEFAULT_SEPARATOR, format_event
from zentik.infrastructure.notifications.messaging import (
    CreatedMessage,
    MessageCreateRequest,
    MessagingService,
)
from zentik.utils.logging import bind_context

if TYPE_CHECKING:
    from zentik.domains.admin_subscriptions.resolver import SubscriberResolver

logger = logging.getLogger(__name__)


class AdminNotificationDispatcher:
    """Fans recorded events out to subscribed administrators.

    Attributes:
        _resolver: Finds the administrators subscribed to an event type.
        _channel_cache: Resolves the admin bucket.
        _enricher: Looks up display details.
        _messaging: Creates the message.
        _separator: Separator between body parts.
        _enabled: When False, events are ignored.
        _pending: Background tasks not finished yet.
    """

    def __init__(
        self,
        resolver: "SubscriberResolver",
        channel_cache: AdminChannelCache,
        enricher: ContextEnricher,
        messaging: MessagingService,
        separator: str = DEFAULT_SEPARATOR,
        enabled: bool = True,
    ) -> None:
        self._resolver = resolver
        self._channel_cache = channel_cache
        self._enricher = enricher
        self._messaging = messaging
        self._separator = separator
        self._enabled = enabled
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        """Number of fan-outs still running."""
        return len(self._pending)

    def register(self, recorder: EventRecorder) -> None:
        """Attach the dispatcher to an event recorder."""
        recorder.register_listener(self.handle_event)
        logger.info("Admin notification dispatcher subscribed to recorded events")

    async def handle_event(self, event: EventData) -> None:
        """Schedule the fan-out of an event and return immediately.

        Args:
            event: Recorded event.
        """
        if not self._enabled:
            return

        task = asyncio.create_task(
            self.notify_subscribers(event),
            name=f"admin-notify-{event.id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def notify_subscribers(self, event: EventData) -> CreatedMessage | None:
        """Run the fan-out for one event.

        Never raises; failures are logged with the event id.

        Args:
            event: Recorded event.

        Returns:
            The created message, or None when nothing was sent.
        """
        # Tasks run in a copied context, so this stays local to the fan-out
        bind_context(event_id=event.id, event_type=event.type.value)

        try:
            recipients = await self._resolver.resolve(event.type)
            if not recipients:
                return None

            channel = await self._channel_cache.get_or_resolve()
            if channel is None:
                logger.warning(
                    "Cannot notify admins about event %s: no admin bucket",
                    event.id,
                )
                return None

            context = await self._enricher.enrich(event)
            title, body = format_event(event.type, context, self._separator)

            message = await self._messaging.create_message(
                MessageCreateRequest(
                    bucket_id=channel.id,
                    title=title,
                    body=body,
                    recipient_user_ids=list(recipients),
                    sender_user_id=channel.owner_user_id,
                    delivery_type=NotificationDeliveryType.NORMAL,
                    skip_event_tracking=True,
                )
            )
        except Exception as e:
            logger.error(
                "Failed to notify admins for event %s (%s): %s",
                event.id,
                event.type.value,
                str(e),
                exc_info=True,
            )
            return None

        logger.debug(
            "Created admin message %s for event %s to %d admin(s)",
            message.id,
            event.id,
            len(recipients),
        )
        return message

    async def drain(self) -> None:
        """Wait for every scheduled fan-out to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
