# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Contract between the admin dispatcher and the messaging layer.

The dispatcher only needs to create one message on a bucket. The
``skip_event_tracking`` flag is part of that contract: a messaging
implementation must not record a MESSAGE event for a request that sets
it, otherwise every admin notification would produce another event and
re-enter the dispatcher.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from zentik.infrastructure.database.models.message import NotificationDeliveryType


@dataclass(frozen=True)
class MessageCreateRequest:
    """Request to create one message on a bucket.

    Attributes:
        bucket_id: Bucket the message is posted to.
        title: Message title.
        body: Message body.
        recipient_user_ids: Users the message is addressed to.
        sender_user_id: User the message is created on behalf of.
        delivery_type: Delivery urgency.
        skip_event_tracking: Do not record a MESSAGE event for this message.
    """

    bucket_id: str
    title: str
    body: str | None = None
    recipient_user_ids: list[str] = field(default_factory=list)
    sender_user_id: str | None = None
    delivery_type: NotificationDeliveryType = NotificationDeliveryType.NORMAL
    skip_event_tracking: bool = False


@dataclass(frozen=True)
class CreatedMessage:
    """Identifier of a created message."""

    id: str


@runtime_checkable
class MessagingService(Protocol):
    """Anything able to create a message on a bucket."""

    async def create_message(self, request: MessageCreateRequest) -> CreatedMessage:
        """Create one message and return its id."""
        ...
