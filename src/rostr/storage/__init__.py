"""
Rostr - Persistent key/value storage.

The onboarding tracker and capture stores only talk to `KeyValueStore`;
`build_store()` picks the concrete backend from settings.
"""

from rostr.config import RostrSettings
from rostr.storage.base import KeyValueStore
from rostr.storage.file import FileStore
from rostr.storage.memory import MemoryStore


def build_store(settings: RostrSettings) -> KeyValueStore:
    """Create the storage backend named by `settings.storage_backend`."""
    if settings.storage_backend == "memory":
        return MemoryStore()
    if settings.storage_backend == "supabase":
        from rostr.storage.supabase_store import SupabaseStore, get_client

        return SupabaseStore(get_client(settings), device_id=settings.device_id)
    return FileStore(settings.storage_path)


__all__ = ["KeyValueStore", "MemoryStore", "FileStore", "build_store"]
