# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the event taxonomy."""

import pytest

from zentik.infrastructure.events.types import EventRegistry, EventTheme, EventType


class TestEventRegistry:
    """Tests for EventRegistry."""

    def test_every_event_type_has_a_theme(self) -> None:
        for event_type in EventType:
            assert EventRegistry.get_theme(event_type) is not None, event_type

    @pytest.mark.parametrize(
        ("event_type", "theme"),
        [
            (EventType.LOGIN_OAUTH, EventTheme.SESSION),
            (EventType.ACCOUNT_DELETE, EventTheme.ACCOUNT),
            (EventType.DEVICE_UNREGISTER, EventTheme.DEVICE),
            (EventType.BUCKET_SHARING, EventTheme.BUCKET),
            (EventType.NOTIFICATION_ACK, EventTheme.MESSAGING),
            (EventType.SYSTEM_TOKEN_REQUEST_DECLINED, EventTheme.TOKEN_REQUEST),
            (EventType.USER_FEEDBACK, EventTheme.FEEDBACK),
            (EventType.EMAIL_FAILED, EventTheme.EMAIL),
        ],
    )
    def test_get_theme(self, event_type: EventType, theme: EventTheme) -> None:
        assert EventRegistry.get_theme(event_type) == theme

    def test_get_theme_accepts_raw_values(self) -> None:
        assert EventRegistry.get_theme("LOGOUT") == EventTheme.SESSION

    def test_get_theme_unknown_value(self) -> None:
        assert EventRegistry.get_theme("SOMETHING_NEW") is None

    def test_device_events(self) -> None:
        assert EventRegistry.is_device_event(EventType.DEVICE_REGISTER)
        assert EventRegistry.is_device_event(EventType.NOTIFICATION)
        assert EventRegistry.is_device_event("NOTIFICATION_ACK")
        assert not EventRegistry.is_device_event(EventType.BUCKET_SHARING)
        assert not EventRegistry.is_device_event("SOMETHING_NEW")
