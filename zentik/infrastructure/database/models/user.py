# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User, device and session models.

These tables are owned by the user/auth layer; the event pipeline only
reads them to check privileges and to enrich admin notifications.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from zentik.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class UserRole(str, Enum):
    """Roles a user can hold. Only ADMIN is a privileged operator."""

    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"
    USER = "USER"


class DevicePlatform(str, Enum):
    """Platforms a device can be registered from."""

    IOS = "IOS"
    ANDROID = "ANDROID"
    WEB = "WEB"


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Registered user."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="users_role_enum"),
        nullable=False,
        default=UserRole.USER,
    )

    @property
    def full_name(self) -> str:
        """First and last name joined, falling back to the username."""
        return " ".join(part for part in (self.first_name, self.last_name) if part) or self.username

    @property
    def is_admin(self) -> bool:
        """Check if the user currently holds the administrator role."""
        return self.role == UserRole.ADMIN


class UserDevice(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Device registered by a user for push delivery."""

    __tablename__ = "user_devices"

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    platform: Mapped[DevicePlatform] = mapped_column(
        SAEnum(DevicePlatform, name="device_platform_enum"),
        nullable=False,
    )
    device_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    device_model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    os_version: Mapped[str | None] = mapped_column(String(100), nullable=True)


class UserSession(UUIDPrimaryKeyMixin, Base):
    """Login session; login_provider is set for OAuth logins."""

    __tablename__ = "user_sessions"

    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_id: Mapped[str] = mapped_column(String(255), nullable=False)
    login_provider: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
