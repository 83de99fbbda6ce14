"""In-process evaluation of FilterCriteria with SQL semantics.

Used by :class:`~wyvern.repository.memory.InMemoryRepository` so the
in-memory variant returns what PostgreSQL would return for the same
criteria:

* a comparison against NULL is never true (only IS NULL matches it);
* ``x NOT IN (…, NULL)`` is never true;
* LIKE is case-sensitive, ``%`` matches any run, ``_`` one character,
  and a backslash escapes the next character;
* ASC sorts NULLs last, DESC sorts NULLs first.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable, Collection, Mapping, Sequence
from functools import lru_cache
from typing import Any, TypeVar

from wyvern.errors import QueryError
from wyvern.query.condition import Condition, SortOrder
from wyvern.query.criteria import FilterCriteria
from wyvern.query.operators import Operator, SortDirection
from wyvern.query.values import ConditionValue, ValueKind, scalar_kind

T = TypeVar("T")

MemoryOperator = Callable[[Any, ConditionValue], bool]


def _check_comparable(field_value: Any, value: Any) -> None:
    # bool subclasses int; SQL has no boolean-integer comparison.
    if (scalar_kind(field_value) is ValueKind.BOOLEAN) != (scalar_kind(value) is ValueKind.BOOLEAN):
        raise TypeError(f"cannot compare {type(field_value).__name__} with {type(value).__name__}")


@lru_cache(maxsize=256)
def like_to_regex(pattern: str) -> re.Pattern[str]:
    """Convert a SQL LIKE pattern to an anchored Python regex."""
    out: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch == "\\":
            out.append(re.escape(next(chars, "\\")))
        elif ch == "%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return re.compile("".join(out), re.DOTALL)


def _comparison(fn: Callable[[Any, Any], bool]) -> MemoryOperator:
    def evaluate(field_value: Any, value: ConditionValue) -> bool:
        if field_value is None or value is None:
            return False
        _check_comparable(field_value, value)
        return bool(fn(field_value, value))

    return evaluate


def _like(field_value: Any, value: ConditionValue) -> bool:
    if field_value is None or value is None:
        return False
    return like_to_regex(str(value)).fullmatch(str(field_value)) is not None


def _not_like(field_value: Any, value: ConditionValue) -> bool:
    if field_value is None or value is None:
        return False
    return not _like(field_value, value)


def _in(field_value: Any, value: ConditionValue) -> bool:
    if field_value is None:
        return False
    for item in value:
        if item is not None:
            _check_comparable(field_value, item)
    return any(item is not None and item == field_value for item in value)


def _not_in(field_value: Any, value: ConditionValue) -> bool:
    if field_value is None or any(item is None for item in value):
        return False
    for item in value:
        _check_comparable(field_value, item)
    return field_value not in value


MEMORY_OPERATORS: dict[Operator, MemoryOperator] = {
    Operator.EQUAL: _comparison(operator.eq),
    Operator.NOT_EQUAL: _comparison(operator.ne),
    Operator.GREATER_THAN: _comparison(operator.gt),
    Operator.GREATER_THAN_OR_EQUAL: _comparison(operator.ge),
    Operator.LESS_THAN: _comparison(operator.lt),
    Operator.LESS_THAN_OR_EQUAL: _comparison(operator.le),
    Operator.LIKE: _like,
    Operator.NOT_LIKE: _not_like,
    Operator.IN: _in,
    Operator.NOT_IN: _not_in,
    Operator.IS_NULL: lambda field_value, _value: field_value is None,
    Operator.IS_NOT_NULL: lambda field_value, _value: field_value is not None,
}


class CriteriaEvaluator:
    """Filters, sorts and slices ``(entity, row)`` pairs.

    Args:
        operation: Repository operation name reported in errors.
        columns: Known column names.  When given, unknown condition and
            sort fields are rejected before any row is read.
    """

    def __init__(
        self, operation: str = "filter", columns: Collection[str] | None = None
    ) -> None:
        self._operation = operation
        self._columns = columns

    def check_columns(self, criteria: FilterCriteria) -> None:
        """Raise QueryError for any referenced field outside the known columns."""
        if self._columns is None:
            return
        for field in [c.field for c in criteria.conditions] + [s.field for s in criteria.sorts]:
            if field not in self._columns:
                raise QueryError(f'column "{field}" does not exist', operation=self._operation)

    def _column(self, row: Mapping[str, Any], field: str) -> Any:
        if field not in row:
            raise QueryError(f'column "{field}" does not exist', operation=self._operation)
        return row[field]

    def matches(self, row: Mapping[str, Any], conditions: Sequence[Condition]) -> bool:
        """Return True if ``row`` satisfies every condition."""
        for condition in conditions:
            field_value = self._column(row, condition.field)
            evaluate = MEMORY_OPERATORS[Operator(condition.operator)]
            try:
                if not evaluate(field_value, condition.value):
                    return False
            except TypeError as exc:
                raise QueryError(
                    f"operator does not exist: {type(field_value).__name__} "
                    f"{condition.operator.value} {type(condition.value).__name__}",
                    operation=self._operation,
                ) from exc
        return True

    def sort(
        self, pairs: list[tuple[T, Mapping[str, Any]]], sorts: Sequence[SortOrder]
    ) -> list[tuple[T, Mapping[str, Any]]]:
        """Stable multi-key sort; the first SortOrder has the highest priority."""
        result = list(pairs)
        for sort in reversed(sorts):
            descending = SortDirection(sort.direction) is SortDirection.DESC

            def key(pair: tuple[T, Mapping[str, Any]], field: str = sort.field) -> tuple:
                value = self._column(pair[1], field)
                return (value is None, value)

            try:
                result.sort(key=key, reverse=descending)
            except TypeError as exc:
                raise QueryError(
                    f"could not order by {sort.field}: mixed value types",
                    operation=self._operation,
                ) from exc
        return result

    def apply(
        self, pairs: Sequence[tuple[T, Mapping[str, Any]]], criteria: FilterCriteria
    ) -> list[T]:
        """Return the entities selected by ``criteria``, in result order."""
        self.check_columns(criteria)
        selected = [p for p in pairs if self.matches(p[1], criteria.conditions)]
        selected = self.sort(selected, criteria.sorts)
        start = criteria.offset or 0
        stop = None if criteria.limit is None else start + criteria.limit
        return [entity for entity, _row in selected[start:stop]]
