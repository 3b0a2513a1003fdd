# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Message model.

Only the columns the admin fan-out path writes are modelled here; push
delivery state lives with the notification layer.
"""

from enum import Enum

from sqlalchemy import Enum as SAEnum, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from zentik.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class NotificationDeliveryType(str, Enum):
    """How urgently a message should be delivered."""

    SILENT = "SILENT"
    NORMAL = "NORMAL"
    CRITICAL = "CRITICAL"
    NO_PUSH = "NO_PUSH"


class Message(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Message posted to a bucket."""

    __tablename__ = "messages"

    bucket_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("buckets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_type: Mapped[NotificationDeliveryType] = mapped_column(
        SAEnum(NotificationDeliveryType, name="messages_deliverytype_enum"),
        nullable=False,
        default=NotificationDeliveryType.NORMAL,
    )
    recipient_user_ids: Mapped[list[str] | None] = mapped_column(
        ARRAY(String(64)),
        nullable=True,
    )
    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
