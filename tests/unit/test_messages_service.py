# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for MessagesService."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from zentik.domains.messages.service import MessagesService
from zentik.infrastructure.database.models.message import Message
from zentik.infrastructure.events.recorder import EventRecorder, InvalidEventError
from zentik.infrastructure.events.tracking import EventTrackingService
from zentik.infrastructure.events.types import EventType
from zentik.infrastructure.notifications.channel import AdminChannel
from zentik.infrastructure.notifications.dispatcher import AdminNotificationDispatcher
from zentik.infrastructure.notifications.enricher import EventContext
from zentik.infrastructure.notifications.messaging import MessageCreateRequest, MessagingService


@pytest.fixture
def recorder() -> MagicMock:
    recorder = MagicMock()
    recorder.record = AsyncMock()
    return recorder


@pytest.fixture
def service(session_factory, recorder: MagicMock) -> MessagesService:
    return MessagesService(session_factory, EventTrackingService(recorder))


class TestCreateMessage:
    """Tests for MessagesService.create_message."""

    def test_implements_messaging_contract(self, service: MessagesService) -> None:
        assert isinstance(service, MessagingService)

    @pytest.mark.asyncio
    async def test_stores_message_and_tracks_it(
        self,
        service: MessagesService,
        mock_session: AsyncMock,
        recorder: MagicMock,
    ) -> None:
        created = await service.create_message(
            MessageCreateRequest(bucket_id="b1", title="Hello", sender_user_id="u1")
        )

        stored = mock_session.add.call_args.args[0]
        assert isinstance(stored, Message)
        assert stored.id == created.id
        assert stored.bucket_id == "b1"
        assert stored.created_by == "u1"
        assert stored.recipient_user_ids is None
        recorder.record.assert_awaited_once_with(
            EventType.MESSAGE,
            user_id="u1",
            object_id="b1",
        )

    @pytest.mark.asyncio
    async def test_skip_event_tracking_records_nothing(
        self,
        service: MessagesService,
        mock_session: AsyncMock,
        recorder: MagicMock,
    ) -> None:
        await service.create_message(
            MessageCreateRequest(
                bucket_id="admin-bucket",
                title="🔐 User Login",
                recipient_user_ids=["a", "b"],
                sender_user_id="owner",
                skip_event_tracking=True,
            )
        )

        assert mock_session.add.call_args.args[0].recipient_user_ids == ["a", "b"]
        recorder.record.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_tracking_failure_keeps_message(
        self,
        service: MessagesService,
        recorder: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        recorder.record.side_effect = InvalidEventError("broken")

        with caplog.at_level(logging.WARNING):
            created = await service.create_message(
                MessageCreateRequest(bucket_id="b1", title="Hello", sender_user_id="u1")
            )

        assert created.id
        assert any(created.id in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_without_tracking_nothing_is_recorded(
        self,
        session_factory,
        mock_session: AsyncMock,
    ) -> None:
        service = MessagesService(session_factory)

        created = await service.create_message(MessageCreateRequest(bucket_id="b1", title="Hi"))

        assert mock_session.add.call_args.args[0].id == created.id


class TestAdminNotificationLoop:
    """Admin messages must not produce further events."""

    @pytest.mark.asyncio
    async def test_admin_message_does_not_reenter_dispatcher(
        self,
        session_factory,
        mock_session: AsyncMock,
    ) -> None:
        recorder = EventRecorder(session_factory)
        messages = MessagesService(session_factory, EventTrackingService(recorder))

        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=["op1"])
        channel_cache = MagicMock()
        channel_cache.get_or_resolve = AsyncMock(
            return_value=AdminChannel(id="admin-bucket", owner_user_id="owner")
        )
        enricher = MagicMock()
        enricher.enrich = AsyncMock(return_value=EventContext(actor_id="u1"))

        dispatcher = AdminNotificationDispatcher(resolver, channel_cache, enricher, messages)
        dispatcher.register(recorder)

        # A regular message is tracked and fans out once
        await messages.create_message(
            MessageCreateRequest(bucket_id="b1", title="Hello", sender_user_id="u1")
        )
        await dispatcher.drain()

        assert recorder.get_stats()["events_recorded"] == 1
        resolver.resolve.assert_awaited_once_with(EventType.MESSAGE)
        stored_messages = [
            call.args[0] for call in mock_session.add.call_args_list
            if isinstance(call.args[0], Message)
        ]
        assert len(stored_messages) == 2
        assert stored_messages[1].bucket_id == "admin-bucket"
        assert stored_messages[1].recipient_user_ids == ["op1"]
