# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for admin notification formatting."""

import pytest

from zentik.infrastructure.events.types import EventType
from zentik.infrastructure.notifications.enricher import EventContext
from zentik.infrastructure.notifications.formatter import (
    FALLBACK_BODY,
    format_event,
    format_event_body,
    format_event_title,
)


class TestFormatEventTitle:
    """Tests for format_event_title."""

    @pytest.mark.parametrize("event_type", list(EventType))
    def test_every_type_has_a_dedicated_title(self, event_type: EventType) -> None:
        title = format_event_title(event_type)

        assert title
        assert not title.startswith("Event:")

    def test_raw_value_is_accepted(self) -> None:
        assert format_event_title("DEVICE_REGISTER") == "📱 Device Registered"

    def test_unknown_type_gets_generic_title(self) -> None:
        assert format_event_title("SOMETHING_NEW") == "Event: SOMETHING_NEW"


class TestFormatEventBody:
    """Tests for format_event_body."""

    def test_empty_context_uses_fallback(self) -> None:
        assert format_event_body(EventType.LOGIN, EventContext()) == FALLBACK_BODY

    def test_device_registration(self) -> None:
        context = EventContext(
            actor_id="u1",
            actor_name="John Doe",
            actor_email="john@example.com",
            device_platform="IOS",
            device_name="John's iPhone",
            target_id="d1",
        )

        body = format_event_body(EventType.DEVICE_REGISTER, context)

        assert body == (
            "User: John Doe • Email: john@example.com • Device: IOS • Name: John's iPhone"
        )
        assert "Target" not in body

    def test_user_id_shown_when_name_unknown(self) -> None:
        body = format_event_body(EventType.LOGOUT, EventContext(actor_id="u1"))

        assert body == "User ID: u1"

    def test_oauth_login_shows_provider(self) -> None:
        context = EventContext(actor_name="John Doe", provider="github")

        assert format_event_body(EventType.LOGIN_OAUTH, context) == (
            "User: John Doe • Provider: github"
        )

    def test_bucket_event_shows_object_and_target(self) -> None:
        context = EventContext(actor_name="Ann", object_id="b1", target_id="u2")

        assert format_event_body(EventType.BUCKET_SHARING, context) == (
            "User: Ann • Object: b1 • Target: u2"
        )

    def test_theme_hides_unrelated_fields(self) -> None:
        context = EventContext(actor_name="Ann", object_id="b1", provider="github")

        # Account events only describe the user
        assert format_event_body(EventType.ACCOUNT_DELETE, context) == "User: Ann"

    def test_custom_separator(self) -> None:
        context = EventContext(actor_name="Ann", actor_email="ann@example.com")

        assert format_event_body(EventType.REGISTER, context, separator="\n") == (
            "User: Ann\nEmail: ann@example.com"
        )

    def test_email_event_shows_payload_details(self) -> None:
        context = EventContext(
            provider="smtp",
            recipient="user@example.com",
            subject="Welcome",
            error="connection refused",
        )

        body = format_event_body(EventType.EMAIL_FAILED, context)

        assert body == (
            "Provider: smtp • To: user@example.com • Subject: Welcome • Error: connection refused"
        )
        assert body != FALLBACK_BODY

    def test_delivery_failure_shows_error(self) -> None:
        context = EventContext(actor_name="Ann", object_id="n1", error="token expired")

        assert format_event_body(EventType.NOTIFICATION_FAILED, context) == (
            "User: Ann • Object: n1 • Error: token expired"
        )

    def test_unknown_type_shows_everything(self) -> None:
        context = EventContext(actor_id="u1", object_id="o1", target_id="t1")

        assert format_event_body("SOMETHING_NEW", context) == (
            "User ID: u1 • Object: o1 • Target: t1"
        )


def test_format_event_returns_title_and_body() -> None:
    title, body = format_event(EventType.USER_FEEDBACK, EventContext(actor_name="Ann", object_id="log-1"))

    assert title == "💡 User Feedback"
    assert body == "User: Ann • Object: log-1"
