"""Shared test fixtures for the Hippius SDK."""

from __future__ import annotations

import typing as tp
from pathlib import Path

import pytest

from hippius.config_helpers import ConfigStore
from hippius.encryption_utils import RandomSource


class FakeRandomSource(RandomSource):
    """Deterministic random source: each call returns the next counter byte repeated."""

    def __init__(self, start: int = 1) -> None:
        self.counter = start
        self.calls: tp.List[int] = []

    def random_bytes(self, size: int) -> bytes:
        self.calls.append(size)
        value = self.counter % 256
        self.counter += 1
        return bytes([value]) * size


class FakeSleep:
    """Records requested waits instead of sleeping."""

    def __init__(self) -> None:
        self.waits: tp.List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def random_source() -> FakeRandomSource:
    return FakeRandomSource()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def key() -> bytes:
    """A fixed 32-byte content key."""
    return bytes(range(32))


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / ".hippius" / "config.json"


@pytest.fixture
def config(config_path: Path) -> ConfigStore:
    """Config store in a temporary directory, isolated from the real environment."""
    return ConfigStore(config_path, environ={})
