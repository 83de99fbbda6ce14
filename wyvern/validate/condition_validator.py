"""Condition and sort-order validators.

Both validators work on the raw parts (field, operator, value) so the
pydantic models can run them before field coercion, and the compiler can
run them again on a finished FilterCriteria.
"""

from __future__ import annotations

from typing import Any

from wyvern.errors import (
    EmptyFieldError,
    EmptyListError,
    InvalidValueError,
    OperatorValueMismatchError,
)
from wyvern.query.operators import MEMBERSHIP_OPS, NULL_OPS, Operator, SortDirection
from wyvern.query.values import ValueKind, value_kind


def _coerce_operator(operator: Any) -> Operator:
    try:
        return Operator(operator)
    except ValueError as exc:
        raise InvalidValueError(f"Unknown operator: {operator!r}.", operator) from exc


def assert_identifier(name: Any, where: str) -> None:
    """Raise unless ``name`` is a non-empty string."""
    if not isinstance(name, str) or not name.strip():
        raise EmptyFieldError(where)


class ConditionValidator:
    """Checks the field / operator / value-shape invariants of a condition.

    Rules:
    * ``field`` is a non-empty string.
    * IS_NULL / IS_NOT_NULL take no value (``None``).
    * IN / NOT_IN take a non-empty list of scalars.
    * every other operator takes a single non-list scalar.
    """

    def validate_parts(self, field: Any, operator: Any, value: Any) -> Operator:
        """Validate the raw parts of a condition.

        Returns:
            The operator coerced to :class:`Operator`.

        Raises:
            EmptyFieldError: If ``field`` is empty.
            InvalidValueError: If the operator is unknown or the value is not
                a representable ConditionValue.
            OperatorValueMismatchError: If the value shape does not suit the
                operator.
            EmptyListError: If IN / NOT_IN is given an empty list.
        """
        assert_identifier(field, "Condition field")
        op = _coerce_operator(operator)
        kind = value_kind(value)

        if op in NULL_OPS:
            if kind is not ValueKind.NULL:
                raise OperatorValueMismatchError(field, op.value, "no value (null)", kind.value)
            return op

        if op in MEMBERSHIP_OPS:
            if kind is not ValueKind.LIST:
                raise OperatorValueMismatchError(field, op.value, "a list", kind.value)
            if len(value) == 0:
                raise EmptyListError(field, op.value)
            return op

        if kind is ValueKind.LIST:
            raise OperatorValueMismatchError(field, op.value, "a scalar value", kind.value)
        return op

    def validate(self, condition: Any) -> None:
        """Validate an already-built condition."""
        self.validate_parts(condition.field, condition.operator, condition.value)


class SortValidator:
    """Checks that a sort order names a field and a known direction."""

    def validate_parts(self, field: Any, direction: Any) -> SortDirection:
        assert_identifier(field, "Sort field")
        try:
            return SortDirection(direction)
        except ValueError as exc:
            raise InvalidValueError(f"Unknown sort direction: {direction!r}.", direction) from exc

    def validate(self, sort: Any) -> None:
        self.validate_parts(sort.field, sort.direction)
