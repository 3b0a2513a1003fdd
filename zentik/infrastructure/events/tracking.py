# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Typed helpers for recording events from action handlers.

Each helper maps the arguments of one kind of action onto the generic
user_id / object_id / target_id / additional_info fields, so handlers
never have to remember which id goes where.
"""

from typing import Any

from zentik.infrastructure.events.recorder import EventData, EventRecorder
from zentik.infrastructure.events.types import EventType


class EventTrackingService:
    """Records one event per tracked action."""

    def __init__(self, recorder: EventRecorder) -> None:
        self._recorder = recorder

    async def track_login(self, user_id: str) -> EventData:
        return await self._recorder.record(EventType.LOGIN, user_id=user_id)

    async def track_login_oauth(self, user_id: str, provider: str | None = None) -> EventData:
        return await self._recorder.record(
            EventType.LOGIN_OAUTH,
            user_id=user_id,
            additional_info={"provider": provider} if provider else None,
        )

    async def track_logout(self, user_id: str) -> EventData:
        return await self._recorder.record(EventType.LOGOUT, user_id=user_id)

    async def track_register(self, user_id: str) -> EventData:
        return await self._recorder.record(EventType.REGISTER, user_id=user_id)

    async def track_account_delete(self, user_id: str) -> EventData:
        return await self._recorder.record(EventType.ACCOUNT_DELETE, user_id=user_id)

    async def track_push_passthrough(self, system_token_id: str) -> EventData:
        return await self._recorder.record(EventType.PUSH_PASSTHROUGH, object_id=system_token_id)

    async def track_push_passthrough_failed(
        self,
        system_token_id: str,
        reason: str | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.PUSH_PASSTHROUGH_FAILED,
            object_id=system_token_id,
            additional_info={"reason": reason} if reason else None,
        )

    async def track_message(self, user_id: str, bucket_id: str | None = None) -> EventData:
        return await self._recorder.record(
            EventType.MESSAGE,
            user_id=user_id,
            object_id=bucket_id,
        )

    async def track_notification(
        self,
        user_id: str,
        device_id: str,
        notification_id: str | None = None,
        platform: str | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.NOTIFICATION,
            user_id=user_id,
            object_id=notification_id,
            target_id=device_id,
            additional_info={"platform": platform} if platform else None,
        )

    async def track_notification_ack(
        self,
        user_id: str,
        device_id: str,
        notification_id: str,
        platform: str | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.NOTIFICATION_ACK,
            user_id=user_id,
            object_id=notification_id,
            target_id=device_id,
            additional_info={"platform": platform} if platform else None,
        )

    async def track_notification_failed(
        self,
        user_id: str,
        device_id: str,
        notification_id: str | None = None,
        error: str | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.NOTIFICATION_FAILED,
            user_id=user_id,
            object_id=notification_id,
            target_id=device_id,
            additional_info={"error": error} if error else None,
        )

    async def track_bucket_creation(self, user_id: str, bucket_id: str) -> EventData:
        return await self._recorder.record(
            EventType.BUCKET_CREATION,
            user_id=user_id,
            object_id=bucket_id,
        )

    async def track_bucket_deletion(self, user_id: str, bucket_id: str) -> EventData:
        return await self._recorder.record(
            EventType.BUCKET_DELETION,
            user_id=user_id,
            object_id=bucket_id,
        )

    async def track_bucket_sharing(
        self,
        owner_user_id: str,
        bucket_id: str,
        shared_with_user_id: str,
    ) -> EventData:
        return await self._recorder.record(
            EventType.BUCKET_SHARING,
            user_id=owner_user_id,
            object_id=bucket_id,
            target_id=shared_with_user_id,
        )

    async def track_bucket_unsharing(
        self,
        owner_user_id: str,
        bucket_id: str,
        unshared_from_user_id: str,
    ) -> EventData:
        return await self._recorder.record(
            EventType.BUCKET_UNSHARING,
            user_id=owner_user_id,
            object_id=bucket_id,
            target_id=unshared_from_user_id,
        )

    async def track_device_register(self, user_id: str, device_id: str) -> EventData:
        return await self._recorder.record(
            EventType.DEVICE_REGISTER,
            user_id=user_id,
            target_id=device_id,
        )

    async def track_device_unregister(self, user_id: str, device_id: str) -> EventData:
        return await self._recorder.record(
            EventType.DEVICE_UNREGISTER,
            user_id=user_id,
            target_id=device_id,
        )

    async def track_system_token_request_created(
        self,
        user_id: str,
        request_id: str,
    ) -> EventData:
        return await self._recorder.record(
            EventType.SYSTEM_TOKEN_REQUEST_CREATED,
            user_id=user_id,
            object_id=request_id,
        )

    async def track_system_token_request_approved(
        self,
        admin_user_id: str,
        request_id: str,
        requester_user_id: str,
    ) -> EventData:
        return await self._recorder.record(
            EventType.SYSTEM_TOKEN_REQUEST_APPROVED,
            user_id=admin_user_id,
            object_id=request_id,
            target_id=requester_user_id,
        )

    async def track_system_token_request_declined(
        self,
        admin_user_id: str,
        request_id: str,
        requester_user_id: str,
    ) -> EventData:
        return await self._recorder.record(
            EventType.SYSTEM_TOKEN_REQUEST_DECLINED,
            user_id=admin_user_id,
            object_id=request_id,
            target_id=requester_user_id,
        )

    async def track_user_feedback(self, user_id: str | None, user_log_id: str) -> EventData:
        # Only the log id is carried; the feedback payload stays in user logs
        return await self._recorder.record(
            EventType.USER_FEEDBACK,
            user_id=user_id,
            object_id=user_log_id,
            additional_info={"user_log_id": user_log_id},
        )

    async def track_email_sent(
        self,
        to: str,
        subject: str,
        provider: str,
        metadata: dict[str, Any] | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.EMAIL_SENT,
            additional_info={"to": to, "subject": subject, "provider": provider, **(metadata or {})},
        )

    async def track_email_failed(
        self,
        to: str,
        subject: str,
        provider: str,
        error: str,
        metadata: dict[str, Any] | None = None,
    ) -> EventData:
        return await self._recorder.record(
            EventType.EMAIL_FAILED,
            additional_info={
                "to": to,
                "subject": subject,
                "provider": provider,
                "error": error,
                **(metadata or {}),
            },
        )
