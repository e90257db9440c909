from __future__ import annotations

import os
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Provider of random bytes for salts, IVs and keys."""

    @abstractmethod
    def random_bytes(self, size: int) -> bytes:
        pass


class SystemRandomSource(RandomSource):
    """Random bytes from the OS CSPRNG."""

    def random_bytes(self, size: int) -> bytes:
        return os.urandom(size)


def get_random_source(random_source: RandomSource | None = None) -> RandomSource:
    if random_source is None:
        return SystemRandomSource()
    return random_source
