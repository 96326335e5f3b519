"""
Supabase-backed key/value store.

Rows live in the `device_storage` table, one row per (device_id, key).
Lets QA tooling inspect or seed a device's onboarding state remotely.
"""

import logging

from supabase import Client, create_client

from rostr.config import RostrSettings
from rostr.errors import StorageError

logger = logging.getLogger(__name__)

TABLE = "device_storage"

# Singleton client instance
_client: Client | None = None


def get_client(settings: RostrSettings) -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise StorageError("SUPABASE_URL and SUPABASE_ANON_KEY are required for the supabase backend")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


class SupabaseStore:
    """KeyValueStore over a Supabase table, scoped to one device."""

    def __init__(self, client: Client, device_id: str):
        self.client = client
        self.device_id = device_id

    def _table(self):
        return self.client.table(TABLE)

    async def get_item(self, key: str) -> str | None:
        try:
            response = (
                self._table()
                .select("value")
                .eq("device_id", self.device_id)
                .eq("key", key)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            raise StorageError(f"get_item({key!r}) failed: {e}") from e
        # maybe_single() yields no response at all when the row is missing
        if response is None or not response.data:
            return None
        return response.data["value"]

    async def set_item(self, key: str, value: str) -> None:
        row = {"device_id": self.device_id, "key": key, "value": value}
        try:
            self._table().upsert(row, on_conflict="device_id,key").execute()
        except Exception as e:
            raise StorageError(f"set_item({key!r}) failed: {e}") from e

    async def remove_item(self, key: str) -> None:
        try:
            self._table().delete().eq("device_id", self.device_id).eq("key", key).execute()
        except Exception as e:
            raise StorageError(f"remove_item({key!r}) failed: {e}") from e

    async def multi_get(self, keys: list[str]) -> list[tuple[str, str | None]]:
        try:
            response = (
                self._table()
                .select("key, value")
                .eq("device_id", self.device_id)
                .in_("key", keys)
                .execute()
            )
        except Exception as e:
            raise StorageError(f"multi_get failed: {e}") from e
        found = {row["key"]: row["value"] for row in response.data or []}
        return [(key, found.get(key)) for key in keys]

    async def multi_remove(self, keys: list[str]) -> None:
        try:
            self._table().delete().eq("device_id", self.device_id).in_("key", keys).execute()
        except Exception as e:
            raise StorageError(f"multi_remove failed: {e}") from e
        logger.debug(f"Removed {len(keys)} keys for device {self.device_id}")
