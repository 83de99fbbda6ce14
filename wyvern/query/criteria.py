"""FilterCriteria: a storage-agnostic filtered, sorted, paginated query.

Criteria are persistent values.  Every builder call returns a new
FilterCriteria and leaves the receiver untouched, so a base criteria can be
shared and specialised freely::

    base = FilterCriteria.new().with_condition(eq("tenant_id", 7))
    recent = base.with_sort(desc("created_at")).with_limit(20)
    active = base.with_condition(eq("status", "active"))

Conditions are AND-joined.  Their insertion order does not change the
result set, but it does fix the parameter numbering of the compiled SQL.
Insertion order of sorts fixes ORDER BY priority.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from wyvern.errors import InvalidValueError
from wyvern.query.condition import Condition, SortOrder
from wyvern.query.pagination import Pagination
from wyvern.validate.criteria_validator import PaginationValidator

_PAGINATION = PaginationValidator()


class FilterCriteria(BaseModel):
    """Filter criteria for querying entities.

    Attributes:
        conditions: AND-joined conditions, in declaration order.
        sorts: Sort orders, highest priority first.
        limit: Optional maximum number of rows.
        offset: Optional number of rows to skip.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    conditions: tuple[Condition, ...] = ()
    sorts: tuple[SortOrder, ...] = ()
    limit: int | None = None
    offset: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _check_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            _PAGINATION.validate_bound("limit", data.get("limit"))
            _PAGINATION.validate_bound("offset", data.get("offset"))
        return data

    # ------------------------------------------------------------------
    # Builder surface
    # ------------------------------------------------------------------

    @classmethod
    def new(cls) -> FilterCriteria:
        """Creates a new empty filter criteria."""
        return cls()

    def with_condition(self, condition: Condition) -> FilterCriteria:
        """Return a copy with ``condition`` appended."""
        if not isinstance(condition, Condition):
            raise InvalidValueError(
                f"Expected a Condition, got {type(condition).__name__}.", condition
            )
        return self.model_copy(update={"conditions": (*self.conditions, condition)})

    def with_sort(self, sort: SortOrder) -> FilterCriteria:
        """Return a copy with ``sort`` appended (lowest priority so far)."""
        if not isinstance(sort, SortOrder):
            raise InvalidValueError(f"Expected a SortOrder, got {type(sort).__name__}.", sort)
        return self.model_copy(update={"sorts": (*self.sorts, sort)})

    def with_limit(self, limit: int) -> FilterCriteria:
        """Return a copy with the row limit set.

        Raises:
            InvalidPaginationError: If ``limit`` is negative.
        """
        _PAGINATION.validate_bound("limit", limit)
        return self.model_copy(update={"limit": limit})

    def with_offset(self, offset: int) -> FilterCriteria:
        """Return a copy with the row offset set.

        Raises:
            InvalidPaginationError: If ``offset`` is negative.
        """
        _PAGINATION.validate_bound("offset", offset)
        return self.model_copy(update={"offset": offset})

    def with_pagination(self, pagination: Pagination) -> FilterCriteria:
        """Return a copy whose limit/offset select one page."""
        return self.model_copy(update={"limit": pagination.limit, "offset": pagination.offset})

    def without_pagination(self) -> FilterCriteria:
        """Return a copy with limit and offset cleared."""
        return self.model_copy(update={"limit": None, "offset": None})
