# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from zentik.infrastructure.events.recorder import EventData
from zentik.infrastructure.events.types import EventType


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.add = MagicMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def session_factory(mock_session: AsyncMock) -> Callable[[], Any]:
    """Create a session factory yielding the mock session."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[AsyncMock]:
        yield mock_session

    return factory


@pytest.fixture
def scalars_result() -> Callable[[list[Any]], MagicMock]:
    """Build mock results whose scalars().all() returns the given values."""

    def _make(values: list[Any]) -> MagicMock:
        result = MagicMock()
        result.scalars.return_value.all.return_value = values
        return result

    return _make


@pytest.fixture
def scalar_result() -> Callable[[Any], MagicMock]:
    """Build mock results returning one value from every scalar accessor."""

    def _make(value: Any) -> MagicMock:
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        result.scalar_one.return_value = value
        result.scalar.return_value = value
        return result

    return _make


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    return settings


@pytest.fixture
def make_event() -> Callable[..., EventData]:
    """Build EventData snapshots."""

    def _make(
        event_type: EventType = EventType.LOGIN,
        event_id: str = "evt-1",
        **kwargs: Any,
    ) -> EventData:
        return EventData(
            id=event_id,
            type=event_type,
            created_at=datetime.now(timezone.utc),
            **kwargs,
        )

    return _make
