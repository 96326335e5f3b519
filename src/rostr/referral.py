"""
Referral Capture.

Holds at most one referral record: who invited this user, captured from a
link or the clipboard. The record stays until the post-sign-in friend
invite flow consumes it, so the caller must clear it once routed.
"""

import logging

from pydantic import BaseModel, ConfigDict

from rostr.errors import ReferralNotLoadedError, StorageError
from rostr.storage import KeyValueStore

logger = logging.getLogger(__name__)

REFERRAL_STORAGE_KEY = "@rostrdating:referral_data"


class ReferralData(BaseModel):
    """Referral metadata from an invite link."""
    model_config = ConfigDict(extra="ignore")

    ref: str
    phone: str | None = None
    invited_by: str | None = None
    circle: str | None = None
    username: str | None = None


class ReferralStore:
    """
    Persisted referral record with a one-time startup gate.

    `load()` must finish before `referral_data` / `has_referral_data` are
    read; otherwise navigation could see "no referral" for a user who
    arrived through one.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._data: ReferralData | None = None
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def referral_data(self) -> ReferralData | None:
        if not self._loaded:
            raise ReferralNotLoadedError("ReferralStore.load() has not completed")
        return self._data

    @property
    def has_referral_data(self) -> bool:
        return self.referral_data is not None

    async def load(self) -> ReferralData | None:
        """Read the stored referral. Unreadable or corrupt records count as absent."""
        try:
            stored = await self.store.get_item(REFERRAL_STORAGE_KEY)
            if stored:
                self._data = ReferralData.model_validate_json(stored)
                logger.debug(f"Loaded stored referral data: {self._data}")
        except (StorageError, ValueError) as e:
            logger.warning(f"Failed to load referral data: {e}")
            self._data = None
        finally:
            self._loaded = True
        return self._data

    async def set_referral_data(self, data: ReferralData | None) -> None:
        """Persist `data`, or remove the record when None."""
        try:
            if data is not None:
                await self.store.set_item(REFERRAL_STORAGE_KEY, data.model_dump_json(exclude_none=True))
                logger.debug(f"Stored referral data: {data}")
            else:
                await self.store.remove_item(REFERRAL_STORAGE_KEY)
                logger.debug("Cleared referral data")
        except StorageError as e:
            logger.error(f"Failed to store referral data: {e}")
            return
        self._data = data

    async def clear_referral_data(self) -> None:
        await self.set_referral_data(None)
