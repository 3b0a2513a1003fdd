# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database migrations package.

Alembic migrations for the tables the event pipeline reads and writes:
users, devices, sessions, buckets, messages, events and admin
subscriptions.
"""
