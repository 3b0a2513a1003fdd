# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for EventTrackingService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from zentik.infrastructure.events.tracking import EventTrackingService
from zentik.infrastructure.events.types import EventType


@pytest.fixture
def recorder() -> MagicMock:
    recorder = MagicMock()
    recorder.record = AsyncMock()
    return recorder


@pytest.fixture
def tracking(recorder: MagicMock) -> EventTrackingService:
    return EventTrackingService(recorder)


class TestEventTrackingService:
    """Tests for the argument mapping of each helper."""

    @pytest.mark.asyncio
    async def test_login(self, tracking: EventTrackingService, recorder: MagicMock) -> None:
        await tracking.track_login("u1")

        recorder.record.assert_awaited_once_with(EventType.LOGIN, user_id="u1")

    @pytest.mark.asyncio
    async def test_login_oauth_carries_provider(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_login_oauth("u1", "github")

        recorder.record.assert_awaited_once_with(
            EventType.LOGIN_OAUTH,
            user_id="u1",
            additional_info={"provider": "github"},
        )

    @pytest.mark.asyncio
    async def test_login_oauth_without_provider(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_login_oauth("u1")

        assert recorder.record.await_args.kwargs["additional_info"] is None

    @pytest.mark.asyncio
    async def test_device_register_uses_target(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_device_register("u1", "d1")

        recorder.record.assert_awaited_once_with(
            EventType.DEVICE_REGISTER,
            user_id="u1",
            target_id="d1",
        )

    @pytest.mark.asyncio
    async def test_bucket_sharing(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_bucket_sharing("owner", "bucket-1", "friend")

        recorder.record.assert_awaited_once_with(
            EventType.BUCKET_SHARING,
            user_id="owner",
            object_id="bucket-1",
            target_id="friend",
        )

    @pytest.mark.asyncio
    async def test_notification_ack(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_notification_ack("u1", "d1", "n1", platform="ANDROID")

        recorder.record.assert_awaited_once_with(
            EventType.NOTIFICATION_ACK,
            user_id="u1",
            object_id="n1",
            target_id="d1",
            additional_info={"platform": "ANDROID"},
        )

    @pytest.mark.asyncio
    async def test_push_passthrough_uses_system_token_as_object(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_push_passthrough("token-1")

        recorder.record.assert_awaited_once_with(EventType.PUSH_PASSTHROUGH, object_id="token-1")

    @pytest.mark.asyncio
    async def test_token_request_approved(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_system_token_request_approved("admin", "req-1", "requester")

        recorder.record.assert_awaited_once_with(
            EventType.SYSTEM_TOKEN_REQUEST_APPROVED,
            user_id="admin",
            object_id="req-1",
            target_id="requester",
        )

    @pytest.mark.asyncio
    async def test_user_feedback(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_user_feedback("u1", "log-1")

        recorder.record.assert_awaited_once_with(
            EventType.USER_FEEDBACK,
            user_id="u1",
            object_id="log-1",
            additional_info={"user_log_id": "log-1"},
        )

    @pytest.mark.asyncio
    async def test_email_failed(
        self,
        tracking: EventTrackingService,
        recorder: MagicMock,
    ) -> None:
        await tracking.track_email_failed(
            "user@example.com",
            "Welcome",
            "smtp",
            "connection refused",
            metadata={"template": "welcome"},
        )

        recorder.record.assert_awaited_once_with(
            EventType.EMAIL_FAILED,
            additional_info={
                "to": "user@example.com",
                "subject": "Welcome",
                "provider": "smtp",
                "error": "connection refused",
                "template": "welcome",
            },
        )
