# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for EventStore."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql

from zentik.infrastructure.database.models.event import Event
from zentik.infrastructure.events.store import EventStore
from zentik.infrastructure.events.types import EventType


@pytest.fixture
def store(mock_session: AsyncMock) -> EventStore:
    return EventStore(mock_session)


def _compile(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestEventStoreAppend:
    """Tests for EventStore.append."""

    @pytest.mark.asyncio
    async def test_append_adds_one_complete_row(
        self,
        store: EventStore,
        mock_session: AsyncMock,
    ) -> None:
        event = await store.append(
            EventType.DEVICE_REGISTER,
            user_id="u1",
            target_id="d1",
            additional_info={"platform": "IOS"},
        )

        mock_session.add.assert_called_once_with(event)
        mock_session.flush.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
        assert isinstance(event, Event)
        assert event.id
        assert event.type == EventType.DEVICE_REGISTER
        assert event.user_id == "u1"
        assert event.object_id is None
        assert event.target_id == "d1"
        assert event.additional_info == {"platform": "IOS"}
        assert event.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_append_generates_distinct_ids(self, store: EventStore) -> None:
        first = await store.append(EventType.LOGIN, user_id="u1")
        second = await store.append(EventType.LOGIN, user_id="u1")

        assert first.id != second.id


class TestEventStoreQueries:
    """Tests for the read side of EventStore."""

    @pytest.mark.asyncio
    async def test_find_page_applies_filters_and_paging(
        self,
        store: EventStore,
        mock_session: AsyncMock,
        scalar_result,
        scalars_result,
    ) -> None:
        row = Event(
            id="e1",
            type=EventType.LOGIN,
            user_id="u1",
            created_at=datetime.now(timezone.utc),
        )
        mock_session.execute.side_effect = [scalar_result(1), scalars_result([row])]

        events, total = await store.find_page(
            page=3,
            limit=10,
            event_type=EventType.LOGIN,
            user_id="u1",
        )

        assert events == [row]
        assert total == 1

        count_sql = _compile(mock_session.execute.await_args_list[0].args[0])
        page_stmt = mock_session.execute.await_args_list[1].args[0]
        page_sql = _compile(page_stmt)
        assert "count(*)" in count_sql
        assert "events.type =" in page_sql
        assert "events.user_id =" in page_sql
        assert "events.object_id" not in page_sql.split("WHERE")[1]
        assert "ORDER BY events.created_at DESC" in page_sql
        params = page_stmt.compile(dialect=postgresql.dialect()).params
        assert sorted(v for k, v in params.items() if k.startswith("param_")) == [10, 20]

    @pytest.mark.asyncio
    async def test_count(
        self,
        store: EventStore,
        mock_session: AsyncMock,
        scalar_result,
    ) -> None:
        mock_session.execute.return_value = scalar_result(42)

        assert await store.count() == 42

    @pytest.mark.asyncio
    async def test_count_empty_table(
        self,
        store: EventStore,
        mock_session: AsyncMock,
        scalar_result,
    ) -> None:
        mock_session.execute.return_value = scalar_result(None)

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_find_by_object_id(
        self,
        store: EventStore,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        mock_session.execute.return_value = scalars_result([])

        assert await store.find_by_object_id("bucket-1") == []
        sql = _compile(mock_session.execute.await_args.args[0])
        assert "events.object_id =" in sql
