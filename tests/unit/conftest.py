"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.address import Address
from tests.helpers import make_key, make_seed


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked entity store for unit testing."""

    def __init__(self) -> None:
        self.records = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def key() -> Address:
    """The key proven by the caller."""
    return make_key("owner")


@pytest.fixture
def other_key() -> Address:
    """A key that controls nothing."""
    return make_key("mallory")


@pytest.fixture
def seed() -> bytes:
    return make_seed("seed-1")
