# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Title and body text for admin notifications.

Both functions are total: every event type has a title, unknown values
get ``"Event: <type>"``, and a body with no details falls back to
``"New event occurred"``.

Body parts always appear in the same order:
user > email > provider > device platform > device name > object > target
> recipient > subject > error.
Which of them are shown depends on the theme of the event type.
"""

from zentik.infrastructure.events.types import EventRegistry, EventTheme, EventType
from zentik.infrastructure.notifications.enricher import EventContext

DEFAULT_SEPARATOR = " • "
FALLBACK_BODY = "New event occurred"

EVENT_TITLES: dict[EventType, str] = {
    EventType.LOGIN: "🔐 User Login",
    EventType.LOGIN_OAUTH: "🔐 OAuth Login",
    EventType.LOGOUT: "👋 User Logout",
    EventType.REGISTER: "✨ New User Registration",
    EventType.ACCOUNT_DELETE: "⚠️ Account Deleted",
    EventType.DEVICE_REGISTER: "📱 Device Registered",
    EventType.DEVICE_UNREGISTER: "📱 Device Unregistered",
    EventType.BUCKET_CREATION: "🪣 Bucket Created",
    EventType.BUCKET_SHARING: "🔗 Bucket Shared",
    EventType.BUCKET_UNSHARING: "🔓 Bucket Unshared",
    EventType.BUCKET_DELETION: "🗑️ Bucket Deleted",
    EventType.MESSAGE: "💬 New Message",
    EventType.NOTIFICATION: "🔔 Notification Sent",
    EventType.NOTIFICATION_ACK: "✅ Notification Acknowledged",
    EventType.NOTIFICATION_FAILED: "❗ Notification Failed",
    EventType.PUSH_PASSTHROUGH: "📤 Push Passthrough",
    EventType.PUSH_PASSTHROUGH_FAILED: "❗ Push Passthrough Failed",
    EventType.SYSTEM_TOKEN_REQUEST_CREATED: "🔑 Token Request Created",
    EventType.SYSTEM_TOKEN_REQUEST_APPROVED: "✅ Token Request Approved",
    EventType.SYSTEM_TOKEN_REQUEST_DECLINED: "❌ Token Request Declined",
    EventType.USER_FEEDBACK: "💡 User Feedback",
    EventType.EMAIL_SENT: "📧 Email Sent",
    EventType.EMAIL_FAILED: "❗ Email Failed",
}

# Body parts shown per theme
_ALL_FIELDS = frozenset(
    {"user", "email", "provider", "device", "object", "target", "recipient", "subject", "error"}
)
THEME_FIELDS: dict[EventTheme, frozenset[str]] = {
    EventTheme.SESSION: frozenset({"user", "email", "provider"}),
    EventTheme.ACCOUNT: frozenset({"user", "email"}),
    EventTheme.DEVICE: frozenset({"user", "email", "device", "target"}),
    EventTheme.BUCKET: frozenset({"user", "email", "object", "target"}),
    EventTheme.MESSAGING: frozenset({"user", "email", "device", "object", "target", "error"}),
    EventTheme.TOKEN_REQUEST: frozenset({"user", "email", "object", "target"}),
    EventTheme.FEEDBACK: frozenset({"user", "email", "object"}),
    EventTheme.EMAIL: frozenset(
        {"user", "email", "provider", "object", "recipient", "subject", "error"}
    ),
}


def format_event_title(event_type: EventType | str) -> str:
    """Title for an event type.

    Args:
        event_type: Event type (enum member or raw value).

    Returns:
        Non-empty title.
    """
    try:
        return EVENT_TITLES[EventType(event_type)]
    except (ValueError, KeyError):
        return f"Event: {getattr(event_type, 'value', event_type)}"


def format_event_body(
    event_type: EventType | str,
    context: EventContext,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Body for an event from its context.

    Args:
        event_type: Event type (enum member or raw value).
        context: Enriched event details.
        separator: Placed between body parts.

    Returns:
        Joined body parts, or the fallback body when there are none.
    """
    theme = EventRegistry.get_theme(event_type)
    fields = THEME_FIELDS.get(theme, _ALL_FIELDS) if theme else _ALL_FIELDS

    parts: list[str] = []
    if "user" in fields:
        if context.actor_name:
            parts.append(f"User: {context.actor_name}")
        elif context.actor_id:
            parts.append(f"User ID: {context.actor_id}")
    if "email" in fields and context.actor_email:
        parts.append(f"Email: {context.actor_email}")
    if "provider" in fields and context.provider:
        parts.append(f"Provider: {context.provider}")
    if "device" in fields:
        if context.device_platform:
            parts.append(f"Device: {context.device_platform}")
        if context.device_name:
            parts.append(f"Name: {context.device_name}")
    if "object" in fields and context.object_id:
        parts.append(f"Object: {context.object_id}")
    # The device parts already describe the target
    if "target" in fields and context.target_id and not context.device_platform:
        parts.append(f"Target: {context.target_id}")
    if "recipient" in fields and context.recipient:
        parts.append(f"To: {context.recipient}")
    if "subject" in fields and context.subject:
        parts.append(f"Subject: {context.subject}")
    if "error" in fields and context.error:
        parts.append(f"Error: {context.error}")

    return separator.join(parts) if parts else FALLBACK_BODY


def format_event(
    event_type: EventType | str,
    context: EventContext,
    separator: str = DEFAULT_SEPARATOR,
) -> tuple[str, str]:
    """Title and body for an event.

    Returns:
        Tuple of (title, body).
    """
    return format_event_title(event_type), format_event_body(event_type, context, separator)
