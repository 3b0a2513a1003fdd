# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cached lookup of the administrative bucket.

Admin notifications are posted to the one bucket flagged ``is_admin``.
The bucket id is cached after the first successful lookup and validated
again on every use, so a deleted or unflagged bucket is replaced by the
next admin bucket without a restart.

Concurrent refreshes are harmless: each one stores an equally valid id.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select

from zentik.infrastructure.database.connection import SessionFactory
from zentik.infrastructure.database.models.bucket import Bucket
from zentik.infrastructure.database.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminChannel:
    """The administrative bucket and the user messages are sent as.

    Attributes:
        id: Bucket id.
        owner_user_id: Bucket owner, used as the message sender.
    """

    id: str
    owner_user_id: str


class AdminChannelCache:
    """Get-or-resolve cache for the administrative bucket.

    Attributes:
        _session_factory: Opens sessions for bucket lookups.
        _cached_id: Last resolved bucket id, or None.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory
        self._cached_id: str | None = None

    @property
    def cached_id(self) -> str | None:
        """Currently cached bucket id."""
        return self._cached_id

    def invalidate(self) -> None:
        """Forget the cached bucket id."""
        self._cached_id = None

    async def get_or_resolve(self) -> AdminChannel | None:
        """Return the administrative bucket.

        The cached id is used while it still points to an admin bucket.
        Otherwise the cache is cleared and the earliest-created admin
        bucket is selected.

        Returns:
            The admin channel, or None when no admin bucket exists or its
            owner cannot be found.
        """
        async with self._session_factory() as session:
            bucket: Bucket | None = None

            if self._cached_id is not None:
                bucket = await session.get(Bucket, self._cached_id)
                if bucket is None or not bucket.is_admin:
                    logger.info(
                        "Cached admin bucket %s no longer valid, resolving again",
                        self._cached_id,
                    )
                    self.invalidate()
                    bucket = None

            if bucket is None:
                result = await session.execute(
                    select(Bucket)
                    .where(Bucket.is_admin.is_(True))
                    .order_by(Bucket.created_at.asc(), Bucket.id.asc())
                    .limit(1)
                )
                bucket = result.scalar_one_or_none()
                if bucket is None:
                    logger.warning("No admin bucket found, admin notifications are disabled")
                    return None
                self._cached_id = bucket.id
                logger.debug("Resolved admin bucket %s", bucket.id)

            if bucket.user_id is None:
                logger.error("Admin bucket %s has no owner", bucket.id)
                return None

            owner = await session.get(User, bucket.user_id)
            if owner is None:
                logger.error("Owner %s of admin bucket %s not found", bucket.user_id, bucket.id)
                return None

            return AdminChannel(id=bucket.id, owner_user_id=owner.id)
