"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from tests.mocks.mock_clock import FakeClock
from tests.mocks.mock_factories import FakeUpstream
from tests.mocks.mock_settings import make_settings
from urban_dict_client.client import DefinitionClient
from urban_dict_infra.cache.memory_cache import MemoryCacheClient


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    """Return a controllable clock."""
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryCacheClient:
    """Return an empty in-memory cache driven by the fake clock."""
    return MemoryCacheClient(clock=clock)


@pytest.fixture
def upstream() -> FakeUpstream:
    """Return a fake definition API with no routes."""
    return FakeUpstream()


@pytest_asyncio.fixture
async def client(
    memory_cache: MemoryCacheClient, upstream: FakeUpstream
) -> AsyncGenerator[DefinitionClient, None]:
    """Return a DefinitionClient wired to the memory cache and fake upstream."""
    async with upstream.client() as http:
        yield DefinitionClient(memory_cache, http=http)
