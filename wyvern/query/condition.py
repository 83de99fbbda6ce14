"""Condition and SortOrder models.

A condition is one ``field <operator> value`` predicate.  Invariants are
checked eagerly when the model is constructed, so an invalid condition never
exists long enough to reach the compiler::

    from wyvern.query.condition import eq, in_list, is_null, desc

    eq("status", "active")              # status = $n
    in_list("role", ["admin", "owner"]) # role IN ($n, $n+1)
    is_null("deleted_at")               # deleted_at IS NULL
    desc("created_at")                  # ORDER BY created_at DESC
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from wyvern.query.operators import Operator, SortDirection
from wyvern.query.values import ConditionValue, Scalar, normalize_value
from wyvern.validate.condition_validator import ConditionValidator, SortValidator

_FROZEN = ConfigDict(extra="forbid", frozen=True)

_CONDITIONS = ConditionValidator()
_SORTS = SortValidator()


class Condition(BaseModel):
    """A single filter condition.

    Attributes:
        field: Column name (interpolated into SQL as given).
        operator: The comparison to apply.
        value: The value to compare against; ``None`` for null checks and a
            tuple of scalars for IN / NOT_IN.
    """

    model_config = _FROZEN

    field: str
    operator: Operator
    value: ConditionValue = None

    @model_validator(mode="before")
    @classmethod
    def _check_invariants(cls, data: Any) -> Any:
        """Reject malformed conditions with wyvern's own ValidationError."""
        if isinstance(data, dict):
            data = dict(data)
            value = data.get("value")
            data["operator"] = _CONDITIONS.validate_parts(
                data.get("field"), data.get("operator"), value
            )
            data["value"] = normalize_value(value)
        return data

    @classmethod
    def new(cls, field: str, operator: Operator | str, value: Any = None) -> Condition:
        """Create a condition from positional parts."""
        return cls(field=field, operator=operator, value=value)


class SortOrder(BaseModel):
    """Sort order specification.

    The field is emitted as a raw SQL identifier, never parameterized.
    """

    model_config = _FROZEN

    field: str
    direction: SortDirection = SortDirection.ASC

    @model_validator(mode="before")
    @classmethod
    def _check_invariants(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            data["direction"] = _SORTS.validate_parts(
                data.get("field"), data.get("direction", SortDirection.ASC)
            )
        return data


# ---------------------------------------------------------------------------
# Condition helpers
# ---------------------------------------------------------------------------


def eq(field: str, value: Scalar) -> Condition:
    """``field = value``"""
    return Condition.new(field, Operator.EQUAL, value)


def ne(field: str, value: Scalar) -> Condition:
    """``field <> value``"""
    return Condition.new(field, Operator.NOT_EQUAL, value)


def gt(field: str, value: Scalar) -> Condition:
    """``field > value``"""
    return Condition.new(field, Operator.GREATER_THAN, value)


def gte(field: str, value: Scalar) -> Condition:
    """``field >= value``"""
    return Condition.new(field, Operator.GREATER_THAN_OR_EQUAL, value)


def lt(field: str, value: Scalar) -> Condition:
    """``field < value``"""
    return Condition.new(field, Operator.LESS_THAN, value)


def lte(field: str, value: Scalar) -> Condition:
    """``field <= value``"""
    return Condition.new(field, Operator.LESS_THAN_OR_EQUAL, value)


def like(field: str, pattern: str) -> Condition:
    """``field LIKE pattern``"""
    return Condition.new(field, Operator.LIKE, pattern)


def not_like(field: str, pattern: str) -> Condition:
    """``field NOT LIKE pattern``"""
    return Condition.new(field, Operator.NOT_LIKE, pattern)


def in_list(field: str, values: Iterable[Scalar]) -> Condition:
    """``field IN (v1, v2, ...)``"""
    return Condition.new(field, Operator.IN, tuple(values))


def not_in(field: str, values: Iterable[Scalar]) -> Condition:
    """``field NOT IN (v1, v2, ...)``"""
    return Condition.new(field, Operator.NOT_IN, tuple(values))


def is_null(field: str) -> Condition:
    """``field IS NULL``"""
    return Condition.new(field, Operator.IS_NULL)


def is_not_null(field: str) -> Condition:
    """``field IS NOT NULL``"""
    return Condition.new(field, Operator.IS_NOT_NULL)


# ---------------------------------------------------------------------------
# Sort helpers
# ---------------------------------------------------------------------------


def asc(field: str) -> SortOrder:
    return SortOrder(field=field, direction=SortDirection.ASC)


def desc(field: str) -> SortOrder:
    return SortOrder(field=field, direction=SortDirection.DESC)
