"""
Pending Invite Capture.

A single-slot record of a circle invite captured before sign-in. Only the
most recent invite survives. Records older than the TTL are dropped the
next time they are read; there is no background sweep.
"""

import logging
import time
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from rostr.errors import StorageError
from rostr.storage import KeyValueStore

logger = logging.getLogger(__name__)

PENDING_INVITE_KEY = "@pending_circle_invite"

INVITE_TTL_MS = 7 * 24 * 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


class PendingInvite(BaseModel):
    """A captured circle invite awaiting sign-in."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    circle_id: str = Field(alias="circleId")
    inviter_name: str | None = Field(default=None, alias="inviterName")
    timestamp: int  # epoch milliseconds


def is_expired(invite: PendingInvite, now: int, ttl_ms: int = INVITE_TTL_MS) -> bool:
    """True once more than `ttl_ms` has passed since the invite was captured."""
    return now - invite.timestamp > ttl_ms


class PendingInviteStore:
    """Persisted pending circle invite."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], int] = now_ms,
        ttl_ms: int = INVITE_TTL_MS,
    ):
        self.store = store
        self.clock = clock
        self.ttl_ms = ttl_ms

    async def store_pending_invite(self, circle_id: str, inviter_name: str | None = None) -> None:
        """Save an invite for after sign-in, replacing any earlier one."""
        invite = PendingInvite(circle_id=circle_id, inviter_name=inviter_name, timestamp=self.clock())
        try:
            await self.store.set_item(PENDING_INVITE_KEY, invite.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.error(f"Error storing pending invite: {e}")
            return
        logger.info(f"Stored pending invite for circle {circle_id}")

    async def get_pending_invite(self) -> PendingInvite | None:
        """Return the live invite; an expired one is removed and None returned."""
        try:
            raw = await self.store.get_item(PENDING_INVITE_KEY)
            if not raw:
                return None
            invite = PendingInvite.model_validate_json(raw)
        except (StorageError, ValueError) as e:
            logger.error(f"Error retrieving pending invite: {e}")
            return None

        if is_expired(invite, self.clock(), self.ttl_ms):
            logger.info(f"Pending invite for circle {invite.circle_id} expired")
            await self.clear_pending_invite()
            return None

        return invite

    async def has_pending_invite(self) -> bool:
        return await self.get_pending_invite() is not None

    async def clear_pending_invite(self) -> None:
        """Remove the invite once it has been joined or dismissed."""
        try:
            await self.store.remove_item(PENDING_INVITE_KEY)
        except StorageError as e:
            logger.error(f"Error clearing pending invite: {e}")
            return
        logger.debug("Cleared pending invite")
