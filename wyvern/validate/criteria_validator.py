"""FilterCriteria validation orchestrator.

``CriteriaValidator`` is the public entry point.  It wires together the
focused sub-validators and drives validation in declaration order, so the
first violation reported is the first one a reader of the criteria would
meet.

Sub-validator hierarchy
-----------------------
CriteriaValidator
  ├── ConditionValidator   (condition_validator.py) — field / operator / value shape
  ├── SortValidator        (condition_validator.py) — sort field / direction
  └── PaginationValidator  (this module)            — LIMIT / OFFSET range
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wyvern.errors import InvalidPaginationError
from wyvern.validate.condition_validator import ConditionValidator, SortValidator

if TYPE_CHECKING:
    from wyvern.query.criteria import FilterCriteria


class PaginationValidator:
    """Validates LIMIT and OFFSET values."""

    def validate_bound(self, name: str, value: Any) -> None:
        """Raise unless ``value`` is ``None`` or a non-negative integer.

        Raises:
            InvalidPaginationError: On a negative or non-integer value.
        """
        if value is None:
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPaginationError(name, value, "must be an integer")
        if value < 0:
            raise InvalidPaginationError(name, value, "must be non-negative")

    def validate(self, criteria: FilterCriteria) -> None:
        self.validate_bound("limit", criteria.limit)
        self.validate_bound("offset", criteria.offset)


class CriteriaValidator:
    """Validates a FilterCriteria before it is compiled or evaluated.

    Raises the first violation as a subclass of ``ValidationError``.
    """

    def __init__(self) -> None:
        self._conditions = ConditionValidator()
        self._sorts = SortValidator()
        self._pagination = PaginationValidator()

    def validate(self, criteria: FilterCriteria) -> None:
        """Validate ``criteria`` and raise on the first violation found.

        Raises:
            ValidationError: (or subclass) on the first violation.
        """
        for condition in criteria.conditions:
            self._conditions.validate(condition)
        for sort in criteria.sorts:
            self._sorts.validate(sort)
        self._pagination.validate(criteria)
