# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event model and the closed event taxonomy.

Rows in ``events`` are append-only: the pipeline inserts them and never
updates or deletes them. Retention is handled outside this package.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, Enum as SAEnum, Index, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from zentik.infrastructure.database.models.base import Base, UUIDPrimaryKeyMixin


class EventType(str, Enum):
    """Every kind of event the backend records."""

    # Session / account
    LOGIN = "LOGIN"
    LOGIN_OAUTH = "LOGIN_OAUTH"
    LOGOUT = "LOGOUT"
    REGISTER = "REGISTER"
    ACCOUNT_DELETE = "ACCOUNT_DELETE"

    # Devices
    DEVICE_REGISTER = "DEVICE_REGISTER"
    DEVICE_UNREGISTER = "DEVICE_UNREGISTER"

    # Buckets
    BUCKET_CREATION = "BUCKET_CREATION"
    BUCKET_SHARING = "BUCKET_SHARING"
    BUCKET_UNSHARING = "BUCKET_UNSHARING"
    BUCKET_DELETION = "BUCKET_DELETION"

    # Messaging
    MESSAGE = "MESSAGE"
    NOTIFICATION = "NOTIFICATION"
    NOTIFICATION_ACK = "NOTIFICATION_ACK"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
    PUSH_PASSTHROUGH = "PUSH_PASSTHROUGH"
    PUSH_PASSTHROUGH_FAILED = "PUSH_PASSTHROUGH_FAILED"

    # System access token requests
    SYSTEM_TOKEN_REQUEST_CREATED = "SYSTEM_TOKEN_REQUEST_CREATED"
    SYSTEM_TOKEN_REQUEST_APPROVED = "SYSTEM_TOKEN_REQUEST_APPROVED"
    SYSTEM_TOKEN_REQUEST_DECLINED = "SYSTEM_TOKEN_REQUEST_DECLINED"

    # Feedback
    USER_FEEDBACK = "USER_FEEDBACK"

    # Email
    EMAIL_SENT = "EMAIL_SENT"
    EMAIL_FAILED = "EMAIL_FAILED"


class Event(UUIDPrimaryKeyMixin, Base):
    """Immutable record of something that happened.

    Attributes:
        type: Event kind.
        user_id: Acting user, if any.
        object_id: Primary subject (bucket, notification, token request...).
        target_id: Secondary subject (device, shared-with user...).
        additional_info: Type-specific context.
        created_at: Creation timestamp.
    """

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_type_created_at", "type", "created_at"),
        Index("ix_events_user_id", "user_id"),
        Index("ix_events_object_id", "object_id"),
    )

    type: Mapped[EventType] = mapped_column(
        SAEnum(EventType, name="events_type_enum"),
        nullable=False,
    )
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    object_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    target_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    additional_info: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
