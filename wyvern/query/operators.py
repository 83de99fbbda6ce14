"""Operator enum and operator groups for filter conditions.

Conditions are always AND-joined; there is no logical connective here.
The groups below drive both the validator (value-shape rules) and the
compiler (SQL rendering).
"""

from __future__ import annotations

from enum import Enum


class Operator(str, Enum):
    """Comparison operators for filter conditions."""

    EQUAL = "EQ"
    NOT_EQUAL = "NE"
    GREATER_THAN = "GT"
    GREATER_THAN_OR_EQUAL = "GTE"
    LESS_THAN = "LT"
    LESS_THAN_OR_EQUAL = "LTE"
    LIKE = "LIKE"
    NOT_LIKE = "NOT_LIKE"
    IN = "IN"
    NOT_IN = "NOT_IN"
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"


class SortDirection(str, Enum):
    """Sort direction keyword."""

    ASC = "ASC"
    DESC = "DESC"


# ---------------------------------------------------------------------------
# Operator groups
# ---------------------------------------------------------------------------

#: Binary comparison operators: take one scalar value.
COMPARISON_OPS: frozenset[Operator] = frozenset(
    {
        Operator.EQUAL,
        Operator.NOT_EQUAL,
        Operator.GREATER_THAN,
        Operator.GREATER_THAN_OR_EQUAL,
        Operator.LESS_THAN,
        Operator.LESS_THAN_OR_EQUAL,
    }
)

#: Pattern-match operators: take one scalar pattern.
PATTERN_OPS: frozenset[Operator] = frozenset({Operator.LIKE, Operator.NOT_LIKE})

#: Membership operators: take a non-empty list.
MEMBERSHIP_OPS: frozenset[Operator] = frozenset({Operator.IN, Operator.NOT_IN})

#: Null-check operators: take no value.
NULL_OPS: frozenset[Operator] = frozenset({Operator.IS_NULL, Operator.IS_NOT_NULL})

#: Operators whose value is a single scalar.
SCALAR_OPS: frozenset[Operator] = COMPARISON_OPS | PATTERN_OPS

#: SQL keyword for every operator that binds parameters.
SQL_OPERATORS: dict[Operator, str] = {
    Operator.EQUAL: "=",
    Operator.NOT_EQUAL: "<>",
    Operator.GREATER_THAN: ">",
    Operator.GREATER_THAN_OR_EQUAL: ">=",
    Operator.LESS_THAN: "<",
    Operator.LESS_THAN_OR_EQUAL: "<=",
    Operator.LIKE: "LIKE",
    Operator.NOT_LIKE: "NOT LIKE",
    Operator.IN: "IN",
    Operator.NOT_IN: "NOT IN",
    Operator.IS_NULL: "IS NULL",
    Operator.IS_NOT_NULL: "IS NOT NULL",
}
