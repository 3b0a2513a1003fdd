# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Messages domain package."""

from zentik.domains.messages.service import MessagesService

__all__ = ["MessagesService"]
