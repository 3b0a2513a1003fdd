# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for Zentik.

Example:
    >>> from zentik.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.db.url)
"""

from zentik.core.config.settings import (
    AdminNotificationSettings,
    APISettings,
    CORSSettings,
    DatabaseSettings,
    JWTSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "AdminNotificationSettings",
    "APISettings",
    "CORSSettings",
    "DatabaseSettings",
    "JWTSettings",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
