"""InMemoryRepository: dict-backed implementation of the Repository protocol."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from wyvern.config import RepositoryConfig
from wyvern.errors import ConstraintViolationError, NotFoundError
from wyvern.mapping import EntityMapper
from wyvern.policy import CriteriaPolicy
from wyvern.query.criteria import FilterCriteria
from wyvern.repository.evaluator import CriteriaEvaluator
from wyvern.validate.criteria_validator import CriteriaValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")
ID = TypeVar("ID")


class InMemoryRepository(Generic[T, ID]):
    """In-memory implementation of ``Repository[T, ID]``.

    Stores column mappings in a plain dict keyed by identifier and evaluates
    FilterCriteria with SQL semantics, so it can stand in for
    :class:`~wyvern.repository.sql.SqlRepository` in tests.  No operation
    awaits between reading and writing the store, so every operation is
    atomic with respect to other coroutines.

    Args:
        config: Table / id-column / limit configuration.
        mapper: Converts between entities and column mappings.
        id_factory: Generates identifiers for entities created without one.
            Defaults to an auto-incrementing integer starting at 1.
    """

    def __init__(
        self,
        config: RepositoryConfig,
        mapper: EntityMapper[T],
        id_factory: Callable[[], ID] | None = None,
    ) -> None:
        self._config = config
        self._mapper = mapper
        self._id_factory = id_factory or itertools.count(1).__next__
        self._policy = CriteriaPolicy(config)
        self._validator = CriteriaValidator()
        self._rows: dict[ID, dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, entity: T) -> T:
        values = self._mapper.to_values(entity)
        entity_id = values.get(self._config.id_column)
        if entity_id is None:
            # Generated ids skip over explicitly assigned ones.
            entity_id = self._id_factory()
            while entity_id in self._rows:
                entity_id = self._id_factory()
            values[self._config.id_column] = entity_id
        elif entity_id in self._rows:
            raise ConstraintViolationError(
                f"duplicate key value violates unique constraint on "
                f"{self._config.table}.{self._config.id_column}",
                operation="create",
                entity_id=entity_id,
            )
        self._rows[entity_id] = values
        logger.debug("Created %s %r", self._config.entity, entity_id)
        return self._mapper.from_row(values)

    async def read(self, entity_id: ID) -> T:
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._config.entity, entity_id)
        return entity

    async def find_by_id(self, entity_id: ID) -> T | None:
        row = self._rows.get(entity_id)
        return None if row is None else self._mapper.from_row(row)

    async def update(self, entity_id: ID, entity: T) -> T:
        if entity_id not in self._rows:
            raise NotFoundError(self._config.entity, entity_id)
        values = self._mapper.to_values(entity)
        values[self._config.id_column] = entity_id
        self._rows[entity_id] = values
        return self._mapper.from_row(values)

    async def delete(self, entity_id: ID) -> None:
        if self._rows.pop(entity_id, None) is None:
            raise NotFoundError(self._config.entity, entity_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def filter(self, criteria: FilterCriteria) -> list[T]:
        self._validator.validate(criteria)
        criteria = self._policy.apply(criteria)
        return CriteriaEvaluator("filter", self._mapper.columns).apply(self._pairs(), criteria)

    async def count(self, criteria: FilterCriteria) -> int:
        self._validator.validate(criteria)
        evaluator = CriteriaEvaluator("count", self._mapper.columns)
        return len(evaluator.apply(self._pairs(), criteria.without_pagination()))

    async def exists(self, criteria: FilterCriteria) -> bool:
        return await self.count(criteria) > 0

    async def find_all(self) -> list[T]:
        return [self._mapper.from_row(row) for row in self._rows.values()]

    def _pairs(self) -> list[tuple[T, dict[str, Any]]]:
        return [(self._mapper.from_row(row), row) for row in self._rows.values()]

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._rows.clear()

    def __len__(self) -> int:
        return len(self._rows)
