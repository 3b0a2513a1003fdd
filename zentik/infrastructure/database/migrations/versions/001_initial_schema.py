# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-02
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EVENT_TYPES = (
    "LOGIN",
    "LOGIN_OAUTH",
    "LOGOUT",
    "REGISTER",
    "ACCOUNT_DELETE",
    "DEVICE_REGISTER",
    "DEVICE_UNREGISTER",
    "BUCKET_CREATION",
    "BUCKET_SHARING",
    "BUCKET_UNSHARING",
    "BUCKET_DELETION",
    "MESSAGE",
    "NOTIFICATION",
    "NOTIFICATION_ACK",
    "NOTIFICATION_FAILED",
    "PUSH_PASSTHROUGH",
    "PUSH_PASSTHROUGH_FAILED",
    "SYSTEM_TOKEN_REQUEST_CREATED",
    "SYSTEM_TOKEN_REQUEST_APPROVED",
    "SYSTEM_TOKEN_REQUEST_DECLINED",
    "USER_FEEDBACK",
    "EMAIL_SENT",
    "EMAIL_FAILED",
)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=False),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create tables."""
    # =========================================================================
    # USERS, DEVICES AND SESSIONS
    # =========================================================================

    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "MODERATOR", "USER", name="users_role_enum"),
            nullable=False,
            server_default="USER",
        ),
        *_timestamps(),
    )

    op.create_table(
        "user_devices",
        _id_column(),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("device_token", sa.String(255), nullable=True),
        sa.Column(
            "platform",
            sa.Enum("IOS", "ANDROID", "WEB", name="device_platform_enum"),
            nullable=False,
        ),
        sa.Column("device_name", sa.String(255), nullable=True),
        sa.Column("device_model", sa.String(255), nullable=True),
        sa.Column("os_version", sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_devices_user_id", "user_devices", ["user_id"])

    op.create_table(
        "user_sessions",
        _id_column(),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("token_id", sa.String(255), nullable=False),
        sa.Column("login_provider", sa.String(50), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_user_sessions_user_id", "user_sessions", ["user_id"])

    # =========================================================================
    # BUCKETS AND MESSAGES
    # =========================================================================

    op.create_table(
        "buckets",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )
    op.create_index(
        "ix_buckets_is_admin",
        "buckets",
        ["created_at"],
        postgresql_where=sa.text("is_admin"),
    )

    op.create_table(
        "messages",
        _id_column(),
        sa.Column(
            "bucket_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("buckets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("body", sa.Text, nullable=True),
        sa.Column(
            "delivery_type",
            sa.Enum("SILENT", "NORMAL", "CRITICAL", "NO_PUSH", name="messages_deliverytype_enum"),
            nullable=False,
            server_default="NORMAL",
        ),
        sa.Column("recipient_user_ids", postgresql.ARRAY(sa.String(64)), nullable=True),
        sa.Column(
            "created_by",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_messages_bucket_id", "messages", ["bucket_id"])

    # =========================================================================
    # EVENTS AND ADMIN SUBSCRIPTIONS
    # =========================================================================

    op.create_table(
        "events",
        _id_column(),
        sa.Column("type", sa.Enum(*EVENT_TYPES, name="events_type_enum"), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("object_id", sa.String(255), nullable=True),
        sa.Column("target_id", sa.String(255), nullable=True),
        sa.Column("additional_info", postgresql.JSONB, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_events_type_created_at", "events", ["type", "created_at"])
    op.create_index("ix_events_user_id", "events", ["user_id"])
    op.create_index("ix_events_object_id", "events", ["object_id"])

    op.create_table(
        "admin_subscriptions",
        _id_column(),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "event_types",
            postgresql.ARRAY(sa.String(64)),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_admin_subscriptions_user_id"),
    )
    op.create_index(
        "ix_admin_subscriptions_event_types",
        "admin_subscriptions",
        ["event_types"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    """Drop tables."""
    op.drop_index("ix_admin_subscriptions_event_types", table_name="admin_subscriptions")
    op.drop_table("admin_subscriptions")

    op.drop_index("ix_events_object_id", table_name="events")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_index("ix_events_type_created_at", table_name="events")
    op.drop_table("events")

    op.drop_index("ix_messages_bucket_id", table_name="messages")
    op.drop_table("messages")

    op.drop_index("ix_buckets_is_admin", table_name="buckets")
    op.drop_table("buckets")

    op.drop_index("ix_user_sessions_user_id", table_name="user_sessions")
    op.drop_table("user_sessions")
    op.drop_index("ix_user_devices_user_id", table_name="user_devices")
    op.drop_table("user_devices")
    op.drop_table("users")

    for enum_name in (
        "events_type_enum",
        "messages_deliverytype_enum",
        "device_platform_enum",
        "users_role_enum",
    ):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
