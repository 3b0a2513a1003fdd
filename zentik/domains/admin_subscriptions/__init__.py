# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin subscription domain package.

This package provides:
- Subscription storage with upsert-by-administrator
- Resolution of subscribed administrators for an event type
"""

from zentik.domains.admin_subscriptions.resolver import SubscriberResolver
from zentik.domains.admin_subscriptions.service import (
    AdminSubscriptionError,
    AdminSubscriptionService,
    InvalidEventTypesError,
    SubscriptionForbiddenError,
    SubscriptionNotFoundError,
    normalize_event_types,
)

__all__ = [
    "AdminSubscriptionError",
    "AdminSubscriptionService",
    "InvalidEventTypesError",
    "SubscriberResolver",
    "SubscriptionForbiddenError",
    "SubscriptionNotFoundError",
    "normalize_event_types",
]
