# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event recording for Zentik.

Every significant user or system action is recorded as one immutable
event. Registered listeners (such as the admin notification dispatcher)
are invoked after the event has been stored.

Example:
    from zentik.infrastructure.events import EventType, get_event_recorder

    recorder = get_event_recorder()
    await recorder.record(EventType.LOGIN, user_id=user.id)
"""

from zentik.infrastructure.events.recorder import (
    EventData,
    EventListener,
    EventRecorder,
    EventRecorderError,
    InvalidEventError,
    get_event_recorder,
    reset_event_recorder,
)
from zentik.infrastructure.events.store import EventStore
from zentik.infrastructure.events.tracking import EventTrackingService
from zentik.infrastructure.events.types import EventRegistry, EventTheme, EventType

__all__ = [
    "EventData",
    "EventListener",
    "EventRecorder",
    "EventRecorderError",
    "EventRegistry",
    "EventStore",
    "EventTheme",
    "EventTrackingService",
    "EventType",
    "InvalidEventError",
    "get_event_recorder",
    "reset_event_recorder",
]
