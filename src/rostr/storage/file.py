"""
File-backed key/value store.

All keys live in one JSON object on disk. Every write rewrites the file
through a temp file + rename so a crash never leaves half a document.
"""

import json
import logging
import os
from pathlib import Path

from rostr.errors import StorageError

logger = logging.getLogger(__name__)


class FileStore:
    """KeyValueStore persisted as a single JSON document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"Wrote {len(data)} keys to {self.path}")

    async def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    async def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    async def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    async def multi_get(self, keys: list[str]) -> list[tuple[str, str | None]]:
        data = self._read()
        return [(key, data.get(key)) for key in keys]

    async def multi_remove(self, keys: list[str]) -> None:
        data = self._read()
        removed = [key for key in keys if key in data]
        for key in removed:
            del data[key]
        if removed:
            self._write(data)
