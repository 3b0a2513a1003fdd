# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the Zentik database."""

from zentik.infrastructure.database.models.admin_subscription import AdminSubscription
from zentik.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    generate_uuid,
)
from zentik.infrastructure.database.models.bucket import Bucket
from zentik.infrastructure.database.models.event import Event, EventType
from zentik.infrastructure.database.models.message import Message, NotificationDeliveryType
from zentik.infrastructure.database.models.user import (
    DevicePlatform,
    User,
    UserDevice,
    UserRole,
    UserSession,
)

__all__ = [
    "AdminSubscription",
    "Base",
    "Bucket",
    "DevicePlatform",
    "Event",
    "EventType",
    "Message",
    "NotificationDeliveryType",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "UserDevice",
    "UserRole",
    "UserSession",
    "generate_uuid",
]
