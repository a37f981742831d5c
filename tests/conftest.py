"""Shared test fixtures for the gfshare test suite."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest


@pytest.fixture
def seeded_rng() -> Callable[[int], bytes]:
    """Reproducible random source. Never use a seeded source outside tests."""
    return random.Random(1234).randbytes


@pytest.fixture
def secret() -> bytes:
    return b"correct horse battery staple"


@pytest.fixture
def exploding_rng() -> Callable[[int], bytes]:
    """Random source that fails the test if anything draws from it."""

    def _rng(count: int) -> bytes:
        raise AssertionError(f"randomness drawn ({count} bytes)")

    return _rng
