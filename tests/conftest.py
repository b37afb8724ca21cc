"""Pytest configuration and fixtures."""

import pytest

from ulidkit.engine import UlidEngine

KNOWN_ULID = "01AN4Z07BY79KA1307SR9X4MV3"
KNOWN_TIMESTAMP = 1465824320894


class CounterRandomSource:
    """Deterministic source: each fill is the next integer, big-endian."""

    def __init__(self, start: int = 1):
        self.counter = start

    def fill(self, buffer: bytearray) -> None:
        buffer[:] = self.counter.to_bytes(len(buffer), "big")
        self.counter += 1


@pytest.fixture
def known_ulid() -> str:
    return KNOWN_ULID


@pytest.fixture
def counter_source() -> CounterRandomSource:
    return CounterRandomSource()


@pytest.fixture
def fixed_engine(counter_source: CounterRandomSource) -> UlidEngine:
    """Engine pinned to KNOWN_TIMESTAMP with counter randomness."""
    return UlidEngine(counter_source, clock=lambda: KNOWN_TIMESTAMP)


@pytest.fixture
def engine() -> UlidEngine:
    """Engine with system randomness and clock."""
    return UlidEngine()
