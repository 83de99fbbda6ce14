"""Repository: generic async repository protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from wyvern.query.criteria import FilterCriteria

T = TypeVar("T")
ID = TypeVar("ID")


@runtime_checkable
class Repository(Protocol[T, ID]):
    """
    Generic capability set over one entity collection.

    Every backend supplies its own conforming class; there is no shared base
    implementation.  All operations are coroutines that suspend only on
    storage I/O, so any number of callers may use one repository
    concurrently.

    Errors:

    * ``NotFoundError``: ``read``, ``update`` and ``delete`` on an absent id.
    * ``ValidationError``: malformed criteria, raised before storage is hit.
    * ``StorageError``: wrapped driver failure, with ``operation`` and
      ``entity_id`` set.

    Usage::

        user = await repo.create(User(name="Ada", age=36))
        adults = await repo.filter(FilterCriteria.new().with_condition(gte("age", 18)))
    """

    async def create(self, entity: T) -> T: ...

    async def read(self, entity_id: ID) -> T: ...

    async def find_by_id(self, entity_id: ID) -> T | None: ...

    async def update(self, entity_id: ID, entity: T) -> T: ...

    async def delete(self, entity_id: ID) -> None: ...

    async def filter(self, criteria: FilterCriteria) -> list[T]: ...

    async def count(self, criteria: FilterCriteria) -> int: ...

    async def exists(self, criteria: FilterCriteria) -> bool: ...

    async def find_all(self) -> list[T]: ...
