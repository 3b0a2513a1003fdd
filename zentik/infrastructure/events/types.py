# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event taxonomy grouping.

EventType itself lives next to the Event model so the database enum and
the Python enum cannot drift. This module groups the types by theme; the
theme drives how admin notifications are titled and which details their
body carries.

Adding a new event:
1. Add the value to EventType (and a migration for the database enum)
2. Map it to a theme in EventRegistry
3. Give it a title in the notification formatter
"""

from enum import Enum

from zentik.infrastructure.database.models.event import EventType


class EventTheme(str, Enum):
    """Groups of related event types."""

    SESSION = "session"
    ACCOUNT = "account"
    DEVICE = "device"
    BUCKET = "bucket"
    MESSAGING = "messaging"
    TOKEN_REQUEST = "token_request"
    FEEDBACK = "feedback"
    EMAIL = "email"


class EventRegistry:
    """Registry for event metadata and categorization."""

    _theme_map: dict[EventType, EventTheme] = {
        EventType.LOGIN: EventTheme.SESSION,
        EventType.LOGIN_OAUTH: EventTheme.SESSION,
        EventType.LOGOUT: EventTheme.SESSION,
        EventType.REGISTER: EventTheme.ACCOUNT,
        EventType.ACCOUNT_DELETE: EventTheme.ACCOUNT,
        EventType.DEVICE_REGISTER: EventTheme.DEVICE,
        EventType.DEVICE_UNREGISTER: EventTheme.DEVICE,
        EventType.BUCKET_CREATION: EventTheme.BUCKET,
        EventType.BUCKET_SHARING: EventTheme.BUCKET,
        EventType.BUCKET_UNSHARING: EventTheme.BUCKET,
        EventType.BUCKET_DELETION: EventTheme.BUCKET,
        EventType.MESSAGE: EventTheme.MESSAGING,
        EventType.NOTIFICATION: EventTheme.MESSAGING,
        EventType.NOTIFICATION_ACK: EventTheme.MESSAGING,
        EventType.NOTIFICATION_FAILED: EventTheme.MESSAGING,
        EventType.PUSH_PASSTHROUGH: EventTheme.MESSAGING,
        EventType.PUSH_PASSTHROUGH_FAILED: EventTheme.MESSAGING,
        EventType.SYSTEM_TOKEN_REQUEST_CREATED: EventTheme.TOKEN_REQUEST,
        EventType.SYSTEM_TOKEN_REQUEST_APPROVED: EventTheme.TOKEN_REQUEST,
        EventType.SYSTEM_TOKEN_REQUEST_DECLINED: EventTheme.TOKEN_REQUEST,
        EventType.USER_FEEDBACK: EventTheme.FEEDBACK,
        EventType.EMAIL_SENT: EventTheme.EMAIL,
        EventType.EMAIL_FAILED: EventTheme.EMAIL,
    }

    # Events whose target_id is a user device id
    _device_events: frozenset[EventType] = frozenset({
        EventType.DEVICE_REGISTER,
        EventType.DEVICE_UNREGISTER,
        EventType.NOTIFICATION,
        EventType.NOTIFICATION_ACK,
        EventType.NOTIFICATION_FAILED,
    })

    @classmethod
    def get_theme(cls, event_type: EventType | str) -> EventTheme | None:
        """Get the theme of an event type.

        Args:
            event_type: Event type (enum member or raw value).

        Returns:
            Theme, or None for values outside the taxonomy.
        """
        try:
            return cls._theme_map.get(EventType(event_type))
        except ValueError:
            return None

    @classmethod
    def is_device_event(cls, event_type: EventType | str) -> bool:
        """Check whether the event's target_id refers to a device."""
        return event_type in cls._device_events


__all__ = ["EventRegistry", "EventTheme", "EventType"]
