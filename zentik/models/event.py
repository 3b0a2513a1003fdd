# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event listing response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from zentik.infrastructure.database.models.event import EventType


class EventResponse(BaseModel):
    """One recorded event."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Event ID")
    type: EventType = Field(description="Event type")
    user_id: str | None = Field(default=None, description="Acting user")
    object_id: str | None = Field(default=None, description="Primary subject")
    target_id: str | None = Field(default=None, description="Secondary subject")
    additional_info: dict[str, Any] | None = Field(default=None, description="Type-specific context")
    created_at: datetime = Field(description="Creation time")


class EventListResponse(BaseModel):
    """Page of events, newest first."""

    items: list[EventResponse] = Field(description="Events on this page")
    total: int = Field(description="Total matching events")
    page: int = Field(description="Current page")
    limit: int = Field(description="Page size")
    total_pages: int = Field(description="Number of pages")


class EventCountResponse(BaseModel):
    """Total number of recorded events."""

    count: int = Field(description="Total events")
