"""Tests for the Transaction scope against a recording pool."""

from __future__ import annotations

import asyncio
import logging

import asyncpg
import pytest

from wyvern.errors import StorageError, TransactionError
from wyvern.query import FilterCriteria, eq
from wyvern.transaction import Transaction
from tests.fixtures import SEED_USERS, User
from tests.fixtures.fakes import FakePool


@pytest.mark.asyncio
async def test_clean_exit_commits_and_releases(pool):
    async with Transaction(pool) as tx:
        assert tx.is_active
    assert pool.conn.transactions[0].state == "committed"
    assert (pool.acquired, pool.released) == (1, 1)
    assert not tx.is_active


@pytest.mark.asyncio
async def test_exception_rolls_back_and_propagates(pool):
    with pytest.raises(ValueError, match="boom"):
        async with Transaction(pool):
            raise ValueError("boom")
    assert pool.conn.transactions[0].state == "rolled_back"
    assert pool.released == 1


@pytest.mark.asyncio
async def test_rollback_is_logged(pool, caplog):
    with caplog.at_level(logging.INFO, logger="wyvern.transaction"):
        with pytest.raises(KeyError):
            async with Transaction(pool):
                raise KeyError("x")
    assert "Rolling back transaction after KeyError" in caplog.text


@pytest.mark.asyncio
async def test_repositories_share_the_transaction_connection(pool, users_config, user_mapper):
    pool.conn.queue(SEED_USERS[0], 1)
    async with Transaction(pool) as tx:
        users = tx.repository(users_config, user_mapper)
        user = await users.read(1)
        total = await users.count(FilterCriteria.new().with_condition(eq("status", "active")))

    assert user.name == "alice"
    assert total == 1
    assert [c[0] for c in pool.conn.calls] == ["fetchrow", "fetchval"]
    assert pool.conn.transactions[0].state == "committed"


@pytest.mark.asyncio
async def test_failed_statement_rolls_back_earlier_writes(pool, users_config, user_mapper):
    pool.conn.queue({"id": 6, "name": "frank", "email": None, "status": "active", "age": None})

    with pytest.raises(StorageError):
        async with Transaction(pool) as tx:
            users = tx.repository(users_config, user_mapper)
            await users.create(User(name="frank"))
            pool.conn.fail_with(asyncpg.exceptions.UniqueViolationError("duplicate key"))
            await users.create(User(name="frank"))

    assert len(pool.conn.calls) == 2
    assert pool.conn.transactions[0].state == "rolled_back"


@pytest.mark.asyncio
async def test_explicit_commit(pool):
    async with Transaction(pool) as tx:
        await tx.commit()
        assert not tx.is_active
        with pytest.raises(TransactionError, match="not active"):
            tx.connection
    assert pool.conn.transactions[0].state == "committed"
    assert pool.released == 1


@pytest.mark.asyncio
async def test_explicit_rollback_then_clean_exit(pool):
    async with Transaction(pool) as tx:
        await tx.rollback()
    assert pool.conn.transactions[0].state == "rolled_back"
    assert pool.released == 1


@pytest.mark.asyncio
async def test_isolation_and_readonly_are_forwarded(pool):
    async with Transaction(pool, isolation="serializable", readonly=True):
        pass
    tx = pool.conn.transactions[0]
    assert (tx.isolation, tx.readonly) == ("serializable", True)


@pytest.mark.asyncio
async def test_acquire_failure():
    pool = FakePool()
    pool.acquire_error = ConnectionRefusedError("refused")
    with pytest.raises(TransactionError) as exc:
        async with Transaction(pool):
            pass
    assert exc.value.operation == "begin"
    assert exc.value.retryable is True
    assert pool.released == 0


@pytest.mark.asyncio
async def test_begin_failure_releases_connection(pool):
    pool.conn.tx_errors["start"] = asyncpg.exceptions.ConnectionDoesNotExistError("gone")
    with pytest.raises(TransactionError, match="could not begin"):
        async with Transaction(pool):
            pass
    assert pool.released == 1


@pytest.mark.asyncio
async def test_commit_failure_raises_and_releases(pool):
    original = asyncpg.exceptions.SerializationError("could not serialize access")
    pool.conn.tx_errors["commit"] = original
    with pytest.raises(TransactionError) as exc:
        async with Transaction(pool):
            pass
    assert exc.value.operation == "commit"
    assert exc.value.__cause__ is original
    assert pool.released == 1


@pytest.mark.asyncio
async def test_rollback_failure_keeps_original_error(pool):
    pool.conn.tx_errors["rollback"] = asyncpg.InterfaceError("connection is closed")
    with pytest.raises(ValueError, match="original"):
        async with Transaction(pool):
            raise ValueError("original")
    assert pool.released == 1


@pytest.mark.asyncio
async def test_cancellation_rolls_back(pool):
    entered = asyncio.Event()

    async def work() -> None:
        async with Transaction(pool):
            entered.set()
            await asyncio.sleep(3600)

    task = asyncio.ensure_future(work())
    await entered.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert pool.conn.transactions[0].state == "rolled_back"
    assert pool.released == 1


@pytest.mark.asyncio
async def test_transaction_cannot_be_entered_twice(pool):
    tx = Transaction(pool)
    async with tx:
        with pytest.raises(TransactionError, match="already started"):
            await tx.__aenter__()


@pytest.mark.asyncio
async def test_cancellation_during_begin_releases_connection(pool):
    pool.conn.tx_gates["start"] = asyncio.Event()

    async def enter() -> None:
        async with Transaction(pool):
            pass

    task = asyncio.ensure_future(enter())
    while not pool.conn.transactions:
        await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert (pool.acquired, pool.released) == (1, 1)


@pytest.mark.asyncio
async def test_error_creating_transaction_releases_connection(pool, monkeypatch):
    def bad_transaction(isolation=None, readonly=False):
        raise ValueError(f"invalid isolation level: {isolation}")

    monkeypatch.setattr(pool.conn, "transaction", bad_transaction)
    with pytest.raises(ValueError, match="invalid isolation level"):
        async with Transaction(pool, isolation="bogus"):
            pass
    assert (pool.acquired, pool.released) == (1, 1)
