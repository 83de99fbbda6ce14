"""SqlRepository: asyncpg-backed implementation of the Repository protocol."""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from wyvern.adapters.asyncpg import AsyncpgAdapter, Executor
from wyvern.compile.base import SQLCompiler
from wyvern.compile.builder import QueryCompiler
from wyvern.compile.mutations import MutationBuilder
from wyvern.config import RepositoryConfig
from wyvern.errors import NotFoundError
from wyvern.mapping import EntityMapper
from wyvern.policy import CriteriaPolicy
from wyvern.query.criteria import FilterCriteria

logger = logging.getLogger(__name__)

T = TypeVar("T")
ID = TypeVar("ID")


class SqlRepository(Generic[T, ID]):
    """SQL implementation of ``Repository[T, ID]``.

    Every read goes through :class:`~wyvern.compile.builder.QueryCompiler`
    and every write through :class:`~wyvern.compile.mutations.MutationBuilder`,
    so all values reach the driver as bound parameters.

    The executor is borrowed: pass a pool for independent statements, or
    the connection of a :class:`~wyvern.transaction.Transaction` to make
    several operations atomic.

    Args:
        executor: asyncpg pool or connection.
        config: Table / id-column / limit configuration.
        mapper: Converts between entities and column mappings.
        compiler: Dialect compiler; defaults to the one named by
            ``config.dialect``.
    """

    def __init__(
        self,
        executor: Executor,
        config: RepositoryConfig,
        mapper: EntityMapper[T],
        compiler: SQLCompiler | None = None,
    ) -> None:
        compiler = compiler or config.create_compiler()
        self._config = config
        self._mapper = mapper
        self._queries = QueryCompiler(compiler)
        self._mutations = MutationBuilder(compiler)
        self._adapter = AsyncpgAdapter(executor, self._queries)
        self._policy = CriteriaPolicy(config)

    @property
    def config(self) -> RepositoryConfig:
        return self._config

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, entity: T) -> T:
        """Insert ``entity`` and return it as stored.

        A ``None`` identifier is left out of the INSERT so the database
        default (serial, identity, ``gen_random_uuid()`` …) applies.
        """
        values = self._mapper.to_values(entity)
        entity_id = values.get(self._config.id_column)
        if entity_id is None:
            values.pop(self._config.id_column, None)
        compiled = self._mutations.insert(self._config.table, values)
        row = await self._adapter.fetch_one(compiled, operation="create", entity_id=entity_id)
        return self._mapper.from_row(row)

    async def read(self, entity_id: ID) -> T:
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._config.entity, entity_id)
        return entity

    async def find_by_id(self, entity_id: ID) -> T | None:
        compiled = self._mutations.select_by_id(
            self._config.table, self._config.id_column, entity_id
        )
        return await self._adapter.fetch_entity(
            compiled, self._mapper, operation="read", entity_id=entity_id
        )

    async def update(self, entity_id: ID, entity: T) -> T:
        values = self._mapper.to_values(entity)
        values.pop(self._config.id_column, None)
        compiled = self._mutations.update(
            self._config.table, self._config.id_column, entity_id, values
        )
        updated = await self._adapter.fetch_entity(
            compiled, self._mapper, operation="update", entity_id=entity_id
        )
        if updated is None:
            raise NotFoundError(self._config.entity, entity_id)
        return updated

    async def delete(self, entity_id: ID) -> None:
        compiled = self._mutations.delete(self._config.table, self._config.id_column, entity_id)
        row = await self._adapter.fetch_one(compiled, operation="delete", entity_id=entity_id)
        if row is None:
            raise NotFoundError(self._config.entity, entity_id)
        logger.debug("Deleted %s %r", self._config.entity, entity_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def filter(self, criteria: FilterCriteria) -> list[T]:
        compiled = self._queries.compile_select(self._config.table, self._policy.apply(criteria))
        return await self._adapter.fetch_entities(compiled, self._mapper, operation="filter")

    async def count(self, criteria: FilterCriteria) -> int:
        return await self._adapter.count_entities(self._config.table, criteria)

    async def exists(self, criteria: FilterCriteria) -> bool:
        compiled = self._queries.compile_exists(self._config.table, criteria)
        return bool(await self._adapter.fetch_scalar(compiled, operation="exists"))

    async def find_all(self) -> list[T]:
        compiled = self._queries.compile_select(self._config.table, FilterCriteria.new())
        return await self._adapter.fetch_entities(compiled, self._mapper, operation="find_all")
