"""
Key/Value Store Protocol.

Mirrors the device storage API the mobile client persists to: string keys,
string values, batched reads and removals. Backends raise StorageError on
failure; they never return partial results.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Async string key/value storage."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        ...

    async def remove_item(self, key: str) -> None:
        ...

    async def multi_get(self, keys: list[str]) -> list[tuple[str, str | None]]:
        """
        Read several keys at once.

        Returns (key, value) pairs in the order requested; missing keys
        pair with None.
        """
        ...

    async def multi_remove(self, keys: list[str]) -> None:
        ...
