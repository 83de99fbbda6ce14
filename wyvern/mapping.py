"""Entity mapping between storage rows and caller entity types.

Repositories never contain per-entity logic; they go through an
``EntityMapper`` to turn a row mapping into an entity and an entity into
column values.  ``PydanticMapper`` covers any pydantic model.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class EntityMapper(Protocol[T]):
    """Converts between row mappings and entities of type ``T``."""

    def from_row(self, row: Mapping[str, Any]) -> T: ...

    def to_values(self, entity: T) -> dict[str, Any]: ...

    @property
    def columns(self) -> frozenset[str]:
        """Names of the columns a row of this entity has."""
        ...


class PydanticMapper(Generic[M]):
    """``EntityMapper`` for pydantic models.

    Args:
        model: The pydantic model class rows are validated into.
        exclude: Model fields that are never written to storage
            (e.g. computed or read-only columns).
    """

    def __init__(self, model: type[M], exclude: Iterable[str] = ()) -> None:
        self.model = model
        self._exclude = frozenset(exclude)

    def from_row(self, row: Mapping[str, Any]) -> M:
        return self.model.model_validate(dict(row))

    def to_values(self, entity: M) -> dict[str, Any]:
        return entity.model_dump(exclude=set(self._exclude))

    @property
    def columns(self) -> frozenset[str]:
        return frozenset(self.model.model_fields)
