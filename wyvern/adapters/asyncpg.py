"""asyncpg adapter: executes compiled SQL and maps rows and errors back.

The adapter borrows an ``asyncpg.Pool`` or ``asyncpg.Connection`` (both
expose ``fetch`` / ``fetchrow`` / ``fetchval`` / ``execute`` with positional
arguments) and never closes it.  Parameters are bound positionally, so the
``$n`` placeholders produced by
:class:`~wyvern.compile.postgres.PostgresCompiler` line up with
``CompiledSQL.params`` one-to-one.

Driver failures are translated into the storage error taxonomy:

=====================================  ==========================
driver error                           wyvern error
=====================================  ==========================
IntegrityConstraintViolationError      ConstraintViolationError
PostgresConnectionError, InterfaceError,
OSError                                StorageConnectionError
QueryCanceledError, TimeoutError       StorageTimeoutError
any other PostgresError                QueryError
=====================================  ==========================

Usage::

    adapter = AsyncpgAdapter(pool)
    users = await adapter.filter_entities("users", criteria, PydanticMapper(User))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional, TypeVar, Union

import asyncpg

from wyvern.compile.base import CompiledSQL
from wyvern.compile.builder import QueryCompiler
from wyvern.errors import (
    ConstraintViolationError,
    QueryError,
    StorageConnectionError,
    StorageError,
    StorageTimeoutError,
)
from wyvern.mapping import EntityMapper
from wyvern.query.criteria import FilterCriteria

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Anything asyncpg can run a statement on.
Executor = Union[asyncpg.Pool, asyncpg.Connection]

#: Driver exceptions the adapter translates; anything else propagates as-is.
DRIVER_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def translate_error(
    exc: BaseException,
    operation: str,
    entity_id: Any = None,
) -> StorageError:
    """Map a driver exception onto the storage error taxonomy.

    Args:
        exc: The exception raised by asyncpg (or the socket layer).
        operation: Repository operation in flight.
        entity_id: Identity of the entity involved, when known.

    Returns:
        A :class:`~wyvern.errors.StorageError` subclass.  The caller is
        expected to ``raise … from exc``.
    """
    message = f"{operation} failed: {exc}"
    if isinstance(exc, asyncpg.exceptions.IntegrityConstraintViolationError):
        return ConstraintViolationError(message, operation=operation, entity_id=entity_id)
    if isinstance(exc, asyncpg.exceptions.QueryCanceledError) or isinstance(
        exc, asyncio.TimeoutError
    ):
        return StorageTimeoutError(message, operation=operation, entity_id=entity_id)
    if isinstance(
        exc,
        (asyncpg.exceptions.PostgresConnectionError, asyncpg.InterfaceError, OSError),
    ):
        return StorageConnectionError(message, operation=operation, entity_id=entity_id)
    return QueryError(message, operation=operation, entity_id=entity_id)


@contextmanager
def translated_errors(operation: str, entity_id: Any = None) -> Iterator[None]:
    """Re-raise driver exceptions raised inside the block as StorageError."""
    try:
        yield
    except DRIVER_ERRORS as exc:
        error = translate_error(exc, operation, entity_id)
        logger.warning(
            "%s during %s (entity_id=%r): %s",
            type(error).__name__,
            operation,
            entity_id,
            exc,
        )
        raise error from exc


class AsyncpgAdapter:
    """Runs :class:`~wyvern.compile.base.CompiledSQL` against asyncpg.

    Args:
        executor: A borrowed pool or connection.
        compiler: Query compiler used by :meth:`filter_entities` and
            :meth:`count_entities`.  Defaults to PostgreSQL.
    """

    def __init__(self, executor: Executor, compiler: Optional[QueryCompiler] = None) -> None:
        self._executor = executor
        self._compiler = compiler or QueryCompiler()

    # ------------------------------------------------------------------
    # Raw execution
    # ------------------------------------------------------------------

    async def fetch_all(
        self, compiled: CompiledSQL, *, operation: str = "fetch", entity_id: Any = None
    ) -> list[asyncpg.Record]:
        logger.debug("%s: %s", operation, compiled.sql)
        with translated_errors(operation, entity_id):
            return await self._executor.fetch(compiled.sql, *compiled.as_args())

    async def fetch_one(
        self, compiled: CompiledSQL, *, operation: str = "fetch", entity_id: Any = None
    ) -> Optional[asyncpg.Record]:
        logger.debug("%s: %s", operation, compiled.sql)
        with translated_errors(operation, entity_id):
            return await self._executor.fetchrow(compiled.sql, *compiled.as_args())

    async def fetch_scalar(
        self, compiled: CompiledSQL, *, operation: str = "fetch", entity_id: Any = None
    ) -> Any:
        logger.debug("%s: %s", operation, compiled.sql)
        with translated_errors(operation, entity_id):
            return await self._executor.fetchval(compiled.sql, *compiled.as_args())

    async def execute(
        self, compiled: CompiledSQL, *, operation: str = "execute", entity_id: Any = None
    ) -> str:
        """Run a statement and return asyncpg's status tag (e.g. ``'DELETE 1'``)."""
        logger.debug("%s: %s", operation, compiled.sql)
        with translated_errors(operation, entity_id):
            return await self._executor.execute(compiled.sql, *compiled.as_args())

    # ------------------------------------------------------------------
    # Entity mapping
    # ------------------------------------------------------------------

    async def fetch_entities(
        self,
        compiled: CompiledSQL,
        mapper: EntityMapper[T],
        *,
        operation: str = "filter",
    ) -> list[T]:
        rows = await self.fetch_all(compiled, operation=operation)
        return [mapper.from_row(row) for row in rows]

    async def fetch_entity(
        self,
        compiled: CompiledSQL,
        mapper: EntityMapper[T],
        *,
        operation: str = "read",
        entity_id: Any = None,
    ) -> Optional[T]:
        row = await self.fetch_one(compiled, operation=operation, entity_id=entity_id)
        return None if row is None else mapper.from_row(row)

    async def filter_entities(
        self, table: str, criteria: FilterCriteria, mapper: EntityMapper[T]
    ) -> list[T]:
        """Compile ``criteria`` against ``table`` and return mapped entities."""
        compiled = self._compiler.compile_select(table, criteria)
        return await self.fetch_entities(compiled, mapper, operation="filter")

    async def count_entities(self, table: str, criteria: FilterCriteria) -> int:
        """Compile and run the COUNT variant of ``criteria``."""
        compiled = self._compiler.compile_count(table, criteria)
        return int(await self.fetch_scalar(compiled, operation="count"))
