# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin notifications for recorded events.

Exports:
    AdminNotificationDispatcher: Listener fanning events out to admins.
    AdminChannelCache: Cached lookup of the admin bucket.
    ContextEnricher: Display details for an event.
    format_event: Title and body for an event.
"""

from zentik.infrastructure.notifications.channel import AdminChannel, AdminChannelCache
from zentik.infrastructure.notifications.dispatcher import AdminNotificationDispatcher
from zentik.infrastructure.notifications.enricher import ContextEnricher, EventContext
from zentik.infrastructure.notifications.formatter import (
    format_event,
    format_event_body,
    format_event_title,
)
from zentik.infrastructure.notifications.messaging import (
    CreatedMessage,
    MessageCreateRequest,
    MessagingService,
)

__all__ = [
    "AdminChannel",
    "AdminChannelCache",
    "AdminNotificationDispatcher",
    "ContextEnricher",
    "CreatedMessage",
    "EventContext",
    "MessageCreateRequest",
    "MessagingService",
    "format_event",
    "format_event_body",
    "format_event_title",
]
