"""Recording doubles for the subset of the asyncpg API wyvern calls.

``fetch``, ``fetchrow``, ``fetchval``, ``execute``, ``transaction`` and
``acquire``/``release`` are mimicked; every statement is recorded and
queued results or errors are replayed in order.  A transaction step
listed in ``tx_gates`` waits for its event before completing.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Optional


class FakeTransaction:
    """Mimics ``asyncpg.transaction.Transaction``."""

    def __init__(self, conn: FakeConnection, isolation: Optional[str], readonly: bool) -> None:
        self.conn = conn
        self.isolation = isolation
        self.readonly = readonly
        self.state = "new"

    async def _step(self, name: str, state: str) -> None:
        gate = self.conn.tx_gates.get(name)
        if gate is not None:
            await gate.wait()
        error = self.conn.tx_errors.pop(name, None)
        if error is not None:
            self.state = "failed"
            raise error
        self.state = state

    async def start(self) -> None:
        await self._step("start", "started")

    async def commit(self) -> None:
        await self._step("commit", "committed")

    async def rollback(self) -> None:
        await self._step("rollback", "rolled_back")


class FakeConnection:
    """Records every statement and replays queued results or errors."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.results: deque[Any] = deque()
        self.errors: deque[BaseException] = deque()
        self.tx_errors: dict[str, BaseException] = {}
        self.tx_gates: dict[str, asyncio.Event] = {}
        self.transactions: list[FakeTransaction] = []

    def queue(self, *results: Any) -> None:
        self.results.extend(results)

    def fail_with(self, error: BaseException) -> None:
        self.errors.append(error)

    async def _run(self, method: str, sql: str, args: tuple[Any, ...], default: Any) -> Any:
        self.calls.append((method, sql, list(args)))
        if self.errors:
            raise self.errors.popleft()
        return self.results.popleft() if self.results else default

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return await self._run("fetch", sql, args, [])

    async def fetchrow(self, sql: str, *args: Any) -> Optional[dict[str, Any]]:
        return await self._run("fetchrow", sql, args, None)

    async def fetchval(self, sql: str, *args: Any) -> Any:
        return await self._run("fetchval", sql, args, None)

    async def execute(self, sql: str, *args: Any) -> str:
        return await self._run("execute", sql, args, "OK")

    def transaction(self, isolation: Optional[str] = None, readonly: bool = False) -> FakeTransaction:
        tx = FakeTransaction(self, isolation, readonly)
        self.transactions.append(tx)
        return tx

    @property
    def last_call(self) -> tuple[str, str, list[Any]]:
        return self.calls[-1]


class FakePool:
    """Mimics ``asyncpg.Pool`` with a single pooled connection."""

    def __init__(self, conn: Optional[FakeConnection] = None) -> None:
        self.conn = conn or FakeConnection()
        self.acquired = 0
        self.released = 0
        self.acquire_error: Optional[BaseException] = None

    async def acquire(self) -> FakeConnection:
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        return self.conn

    async def release(self, conn: FakeConnection) -> None:
        assert conn is self.conn
        self.released += 1

