# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for SubscriberResolver."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql

from zentik.domains.admin_subscriptions.resolver import SubscriberResolver
from zentik.infrastructure.events.types import EventType


@pytest.fixture
def resolver(session_factory) -> SubscriberResolver:
    return SubscriberResolver(session_factory)


class TestResolve:
    """Tests for SubscriberResolver.resolve."""

    @pytest.mark.asyncio
    async def test_returns_subscribed_admins(
        self,
        resolver: SubscriberResolver,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        mock_session.execute.side_effect = [
            scalars_result(["a", "b", "c"]),
            scalars_result(["c", "a", "b"]),
        ]

        result = await resolver.resolve(EventType.LOGIN)

        assert sorted(result) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_demoted_subscriber_is_excluded(
        self,
        resolver: SubscriberResolver,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        # op2 still has a subscription but is no longer an admin
        mock_session.execute.side_effect = [
            scalars_result(["op1", "op2"]),
            scalars_result(["op1"]),
        ]

        assert await resolver.resolve(EventType.DEVICE_REGISTER) == ["op1"]

    @pytest.mark.asyncio
    async def test_no_subscribers_skips_role_lookup(
        self,
        resolver: SubscriberResolver,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        mock_session.execute.return_value = scalars_result([])

        assert await resolver.resolve(EventType.LOGOUT) == []
        assert mock_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_duplicates_are_collapsed(
        self,
        resolver: SubscriberResolver,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        mock_session.execute.side_effect = [
            scalars_result(["op1", "op1"]),
            scalars_result(["op1"]),
        ]

        assert await resolver.resolve("MESSAGE") == ["op1"]

    @pytest.mark.asyncio
    async def test_queries_array_membership_then_role(
        self,
        resolver: SubscriberResolver,
        mock_session: AsyncMock,
        scalars_result,
    ) -> None:
        mock_session.execute.side_effect = [
            scalars_result(["op1"]),
            scalars_result(["op1"]),
        ]

        await resolver.resolve(EventType.REGISTER)

        dialect = postgresql.dialect()
        first = mock_session.execute.await_args_list[0].args[0].compile(dialect=dialect)
        second = mock_session.execute.await_args_list[1].args[0].compile(dialect=dialect)
        assert "admin_subscriptions.event_types @>" in str(first)
        assert ["REGISTER"] in first.params.values()
        assert "users.role =" in str(second)
        assert "ADMIN" in [getattr(v, "value", v) for v in second.params.values()]
