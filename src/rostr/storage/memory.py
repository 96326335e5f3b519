"""In-memory key/value store (tests, throwaway sessions)."""


class MemoryStore:
    """Dict-backed KeyValueStore."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_get(self, keys: list[str]) -> list[tuple[str, str | None]]:
        return [(key, self._data.get(key)) for key in keys]

    async def multi_remove(self, keys: list[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the current contents."""
        return dict(self._data)
