"""
Pytest configuration and fixtures for Rostr tests.
"""

import asyncio
import os

import pytest

# Set test environment before importing rostr modules
os.environ["ROSTR_ENV"] = "development"
os.environ["STORAGE_BACKEND"] = "memory"

from rostr.config import RostrSettings, get_settings
from rostr.errors import StorageError
from rostr.storage import MemoryStore


def run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


class FailingStore:
    """KeyValueStore whose every call fails."""

    def __init__(self):
        self.calls: list[str] = []

    async def get_item(self, key):
        self.calls.append("get_item")
        raise StorageError("disk on fire")

    async def set_item(self, key, value):
        self.calls.append("set_item")
        raise StorageError("disk on fire")

    async def remove_item(self, key):
        self.calls.append("remove_item")
        raise StorageError("disk on fire")

    async def multi_get(self, keys):
        self.calls.append("multi_get")
        raise StorageError("disk on fire")

    async def multi_remove(self, keys):
        self.calls.append("multi_remove")
        raise StorageError("disk on fire")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def settings(tmp_path):
    return RostrSettings(
        storage_backend="memory",
        storage_path=tmp_path / "storage.json",
        invite_ttl_days=7,
    )


class FakeClock:
    """Millisecond clock the test can move."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()
