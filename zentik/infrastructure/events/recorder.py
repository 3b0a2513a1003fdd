# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event recorder: persist an event, then notify listeners.

The recorder is the single entry point every action handler uses to
record what happened. It:
- validates the event type and payload
- writes exactly one row through EventStore in its own session
- hands an immutable EventData snapshot to every registered listener

Listener calls are isolated from each other and from the caller: an
exception raised by a listener is logged and swallowed, so ``record``
only ever fails when the event could not be persisted.

Example:
    from zentik.infrastructure.events import get_event_recorder, EventType

    recorder = get_event_recorder()

    async def on_event(event):
        print(f"Recorded: {event.type}")

    recorder.register_listener(on_event)

    await recorder.record(EventType.LOGIN, user_id="123")
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Awaitable, Callable

from zentik.infrastructure.database.connection import SessionFactory, get_session
from zentik.infrastructure.database.models.event import Event, EventType
from zentik.infrastructure.events.store import EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventData:
    """Immutable snapshot of a persisted event.

    Attributes:
        id: Event identifier.
        type: Event kind.
        user_id: Acting user.
        object_id: Primary subject id.
        target_id: Secondary subject id.
        additional_info: Type-specific context.
        created_at: Creation timestamp.
    """

    id: str
    type: EventType
    created_at: datetime
    user_id: str | None = None
    object_id: str | None = None
    target_id: str | None = None
    additional_info: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        # Listeners share one snapshot, so the payload must not be writable
        if self.additional_info is not None:
            object.__setattr__(self, "additional_info", _freeze(self.additional_info))

    @classmethod
    def from_model(cls, event: Event) -> "EventData":
        """Build a snapshot from a stored Event row."""
        return cls(
            id=event.id,
            type=event.type,
            created_at=event.created_at,
            user_id=event.user_id,
            object_id=event.object_id,
            target_id=event.target_id,
            additional_info=event.additional_info or None,
        )


def _freeze(value: Any) -> Any:
    """Read-only copy of a JSON-like value."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


# Listeners may be plain functions or coroutine functions
EventListener = Callable[[EventData], Awaitable[None] | None]


class EventRecorderError(Exception):
    """Base exception for event recorder errors."""

    pass


class InvalidEventError(EventRecorderError):
    """Raised when an event fails validation before persistence."""

    pass


class EventRecorder:
    """Persists events and dispatches them to listeners.

    Listeners are registered once during application startup. Each
    listener receives every recorded event.

    Attributes:
        _session_factory: Opens the session the event is written in.
        _listeners: Registered listeners in registration order.
    """

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        """Initialize the recorder.

        Args:
            session_factory: Async context manager factory yielding a
                session that commits on exit.
        """
        self._session_factory = session_factory
        self._listeners: list[EventListener] = []
        self._event_count = 0

    def register_listener(self, listener: EventListener) -> None:
        """Register a listener for every recorded event.

        Args:
            listener: Callable receiving the EventData snapshot.
        """
        self._listeners.append(listener)
        logger.debug("Registered event listener %s", _listener_name(listener))

    async def record(
        self,
        event_type: EventType | str,
        user_id: str | None = None,
        object_id: str | None = None,
        target_id: str | None = None,
        additional_info: Mapping[str, Any] | None = None,
    ) -> EventData:
        """Validate, persist and dispatch one event.

        The row is committed before listeners run.

        Args:
            event_type: Event kind (enum member or raw value).
            user_id: Acting user.
            object_id: Primary subject id.
            target_id: Secondary subject id.
            additional_info: Type-specific context.

        Returns:
            Snapshot of the stored event.

        Raises:
            InvalidEventError: If the type or payload is invalid.
            DatabaseError: If the event could not be persisted.
        """
        validated_type = self._validate_type(event_type)
        if additional_info is not None and not isinstance(additional_info, Mapping):
            raise InvalidEventError("additional_info must be a mapping")

        async with self._session_factory() as session:
            stored = await EventStore(session).append(
                validated_type,
                user_id=user_id,
                object_id=object_id,
                target_id=target_id,
                additional_info=dict(additional_info) if additional_info is not None else None,
            )
        event = EventData.from_model(stored)
        self._event_count += 1

        await self._notify_listeners(event)
        return event

    async def _notify_listeners(self, event: EventData) -> None:
        if not self._listeners:
            return

        async def safe_call(listener: EventListener) -> None:
            """Call listener with error handling."""
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "Listener %s failed for event %s (%s): %s",
                    _listener_name(listener),
                    event.id,
                    event.type.value,
                    str(e),
                    exc_info=True,
                )

        await asyncio.gather(
            *[safe_call(listener) for listener in self._listeners],
            return_exceptions=True,
        )

    @staticmethod
    def _validate_type(event_type: EventType | str) -> EventType:
        try:
            return EventType(event_type)
        except ValueError as e:
            raise InvalidEventError(f"Unknown event type: {event_type!r}") from e

    def get_stats(self) -> dict[str, Any]:
        """Get recorder statistics."""
        return {
            "listeners": [_listener_name(listener) for listener in self._listeners],
            "events_recorded": self._event_count,
        }

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()


def _listener_name(listener: EventListener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


# Singleton instance
_event_recorder: EventRecorder | None = None


def get_event_recorder() -> EventRecorder:
    """Get the singleton event recorder instance."""
    global _event_recorder
    if _event_recorder is None:
        _event_recorder = EventRecorder()
    return _event_recorder


def reset_event_recorder() -> None:
    """Reset the event recorder singleton.

    Useful for testing to ensure clean state between tests.
    """
    global _event_recorder
    if _event_recorder is not None:
        _event_recorder.clear()
    _event_recorder = None
