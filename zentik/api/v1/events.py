# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event listing API endpoints.

Read-only administrative access to recorded events:
- GET / - Paginated list, newest first, with optional filters
- GET /count - Total number of events
- GET /by-type - All events of one type
- GET /by-user - All events performed by a user
- GET /by-object - All events about an object
"""

import logging
import math
from typing import Annotated

from fastapi import APIRouter, Query

from zentik.api.dependencies import DB, AdminUser
from zentik.infrastructure.events.store import EventStore
from zentik.infrastructure.events.types import EventType
from zentik.models.event import EventCountResponse, EventListResponse, EventResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=EventListResponse,
    summary="List events",
    description="List recorded events, newest first. Requires admin access.",
)
async def list_events(
    current_user: AdminUser,
    db: DB,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = 20,
    type: Annotated[EventType | None, Query(description="Filter by event type")] = None,
    user_id: Annotated[str | None, Query(description="Filter by acting user")] = None,
    object_id: Annotated[str | None, Query(description="Filter by primary subject")] = None,
    target_id: Annotated[str | None, Query(description="Filter by secondary subject")] = None,
) -> EventListResponse:
    events, total = await EventStore(db).find_page(
        page=page,
        limit=limit,
        event_type=type,
        user_id=user_id,
        object_id=object_id,
        target_id=target_id,
    )

    return EventListResponse(
        items=[EventResponse.model_validate(event) for event in events],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit) if total else 0,
    )


@router.get(
    "/count",
    response_model=EventCountResponse,
    summary="Count events",
)
async def count_events(
    current_user: AdminUser,
    db: DB,
) -> EventCountResponse:
    return EventCountResponse(count=await EventStore(db).count())


@router.get(
    "/by-type",
    response_model=list[EventResponse],
    summary="List events by type",
)
async def list_events_by_type(
    current_user: AdminUser,
    db: DB,
    type: Annotated[EventType, Query(description="Event type")],
) -> list[EventResponse]:
    events = await EventStore(db).find_by_type(type)
    return [EventResponse.model_validate(event) for event in events]


@router.get(
    "/by-user",
    response_model=list[EventResponse],
    summary="List events by user",
)
async def list_events_by_user(
    current_user: AdminUser,
    db: DB,
    user_id: Annotated[str, Query(description="Acting user")],
) -> list[EventResponse]:
    events = await EventStore(db).find_by_user_id(user_id)
    return [EventResponse.model_validate(event) for event in events]


@router.get(
    "/by-object",
    response_model=list[EventResponse],
    summary="List events by object",
)
async def list_events_by_object(
    current_user: AdminUser,
    db: DB,
    object_id: Annotated[str, Query(description="Primary subject")],
) -> list[EventResponse]:
    events = await EventStore(db).find_by_object_id(object_id)
    return [EventResponse.model_validate(event) for event in events]
