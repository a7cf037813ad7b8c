"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.identifiers.hex_identifier import HexIdentifier


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked tag repository for unit testing."""

    def __init__(self) -> None:
        self.tags = AsyncMock()
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
def tag_id() -> HexIdentifier:
    """A valid tag identifier."""
    return HexIdentifier("055B88A23C1250")
