"""Zentik backend event pipeline.

Records typed events for user and system actions, manages administrator
event subscriptions, and fans recorded events out to subscribed
administrators through the administrative bucket.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
