"""Transaction scope over an asyncpg pool.

Usage::

    async with Transaction(pool) as tx:
        users = tx.repository(RepositoryConfig("users"), PydanticMapper(User))
        orders = tx.repository(RepositoryConfig("orders"), PydanticMapper(Order))
        user = await users.create(User(name="ada"))
        await orders.create(Order(user_id=user.id, total=10))

A clean exit commits; any exception (including cancellation) rolls back
and propagates unchanged.  Finishing the transaction and releasing the
connection run as one shielded task, so a cancelled caller never leaves
the connection checked out mid-transaction.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any, Optional, TypeVar

import asyncpg

from wyvern.adapters.asyncpg import DRIVER_ERRORS, AsyncpgAdapter
from wyvern.config import RepositoryConfig
from wyvern.errors import TransactionError
from wyvern.mapping import EntityMapper
from wyvern.repository.sql import SqlRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transaction:
    """Async context manager that scopes repository work to one transaction.

    Args:
        pool: The asyncpg pool to borrow a connection from.
        isolation: ``"read_committed"``, ``"repeatable_read"`` or
            ``"serializable"``; ``None`` uses the server default.
        readonly: Start a read-only transaction.
    """

    def __init__(
        self,
        pool: asyncpg.Pool,
        *,
        isolation: Optional[str] = None,
        readonly: bool = False,
    ) -> None:
        self._pool = pool
        self._isolation = isolation
        self._readonly = readonly
        self._conn: Optional[asyncpg.Connection] = None
        self._tx: Any = None
        self._finished = False
        self._closing: Optional[asyncio.Future[None]] = None

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Transaction:
        if self._conn is not None:
            raise TransactionError("transaction already started", operation="begin")
        try:
            self._conn = await self._pool.acquire()
        except DRIVER_ERRORS as exc:
            raise TransactionError(
                f"could not acquire a connection: {exc}", operation="begin", retryable=True
            ) from exc

        # __aexit__ does not run when this method raises; release here.
        try:
            self._tx = self._conn.transaction(isolation=self._isolation, readonly=self._readonly)
            await self._tx.start()
        except DRIVER_ERRORS as exc:
            await asyncio.shield(self._release())
            raise TransactionError(f"could not begin transaction: {exc}", operation="begin") from exc
        except BaseException:
            await asyncio.shield(self._release())
            raise
        logger.debug("Transaction started")
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._conn is None:
            return
        if exc_type is not None and not self._finished:
            logger.info("Rolling back transaction after %s", exc_type.__name__)
        # Held on self so the task outlives a cancelled caller.
        self._closing = asyncio.ensure_future(self._close(commit=exc_type is None))
        try:
            await asyncio.shield(self._closing)
        except TransactionError:
            if exc_type is None:
                raise
            logger.warning("Rollback failed; original %s propagates", exc_type.__name__)

    # ------------------------------------------------------------------
    # Explicit control
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        """Commit now.  The connection stays checked out until exit."""
        self._require_active()
        await asyncio.shield(self._finish(commit=True))

    async def rollback(self) -> None:
        """Roll back now.  The connection stays checked out until exit."""
        self._require_active()
        logger.info("Rolling back transaction on request")
        await asyncio.shield(self._finish(commit=False))

    @property
    def is_active(self) -> bool:
        return self._conn is not None and not self._finished

    @property
    def connection(self) -> asyncpg.Connection:
        """The connection this transaction runs on."""
        self._require_active()
        return self._conn

    @property
    def adapter(self) -> AsyncpgAdapter:
        return AsyncpgAdapter(self.connection)

    def repository(self, config: RepositoryConfig, mapper: EntityMapper[T]) -> SqlRepository[T, Any]:
        """Return a :class:`SqlRepository` bound to this transaction."""
        return SqlRepository(self.connection, config, mapper)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_active(self) -> None:
        if not self.is_active:
            raise TransactionError("transaction is not active", operation="transaction")

    async def _finish(self, commit: bool) -> None:
        if self._finished:
            return
        operation = "commit" if commit else "rollback"
        try:
            if commit:
                await self._tx.commit()
            else:
                await self._tx.rollback()
        except DRIVER_ERRORS as exc:
            raise TransactionError(f"{operation} failed: {exc}", operation=operation) from exc
        finally:
            self._finished = True
        logger.debug("Transaction %s", "committed" if commit else "rolled back")

    async def _close(self, commit: bool) -> None:
        try:
            await self._finish(commit)
        finally:
            await self._release()

    async def _release(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            await self._pool.release(conn)
