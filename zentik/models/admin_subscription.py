# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin subscription request and response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from zentik.infrastructure.database.models.event import EventType


class AdminSubscriptionRequest(BaseModel):
    """Event types an administrator wants to be notified about.

    Used for both subscribe and update; duplicates are collapsed.
    """

    event_types: list[EventType] = Field(
        description="Event types to subscribe to",
        examples=[["LOGIN", "DEVICE_REGISTER"]],
    )


class AdminSubscriptionResponse(BaseModel):
    """Stored admin subscription."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Subscription ID")
    user_id: str = Field(description="Subscribed administrator")
    event_types: list[EventType] = Field(description="Subscribed event types")
    created_at: datetime = Field(description="Creation time")
    updated_at: datetime = Field(description="Last update time")
