"""Shared pytest fixtures for wyvern unit tests."""
from __future__ import annotations

import pytest
import pytest_asyncio

from wyvern.config import RepositoryConfig
from wyvern.mapping import PydanticMapper
from wyvern.repository.memory import InMemoryRepository
from tests.fixtures import User, seed_users
from tests.fixtures.fakes import FakeConnection, FakePool

USERS = RepositoryConfig(table="users", entity_name="User")


@pytest.fixture
def users_config() -> RepositoryConfig:
    return USERS


@pytest.fixture
def user_mapper() -> PydanticMapper[User]:
    return PydanticMapper(User)


@pytest.fixture
def conn() -> FakeConnection:
    """Recording stand-in for an ``asyncpg.Connection``."""
    return FakeConnection()


@pytest.fixture
def pool(conn: FakeConnection) -> FakePool:
    return FakePool(conn)


@pytest_asyncio.fixture
async def memory_repo(user_mapper: PydanticMapper[User]) -> InMemoryRepository[User, int]:
    """In-memory users repository seeded with ``SEED_USERS``."""
    repo: InMemoryRepository[User, int] = InMemoryRepository(USERS, user_mapper)
    for user in seed_users():
        await repo.create(user)
    return repo
