"""Clause-level SQL builders.

Each class handles exactly one SQL clause and returns an empty string when
the clause is absent, so the caller can drop it from the statement.

Classes
-------
WhereClauseBuilder       — ``WHERE <cond> AND <cond> …``
OrderByClauseBuilder     — ``ORDER BY <field> ASC|DESC, …``
PaginationClauseBuilder  — ``LIMIT <n> OFFSET <m>``
"""
from __future__ import annotations

from collections.abc import Sequence

from wyvern.compile.predicate_builder import PredicateBuilder
from wyvern.query.condition import Condition, SortOrder
from wyvern.query.operators import SortDirection


class WhereClauseBuilder:
    """Builds the ``WHERE …`` clause; conditions are AND-joined in order."""

    def __init__(self, predicate_builder: PredicateBuilder) -> None:
        self._pred = predicate_builder

    def build(self, conditions: Sequence[Condition]) -> str:
        if not conditions:
            return ""
        return "WHERE " + " AND ".join(self._pred.build(c) for c in conditions)


class OrderByClauseBuilder:
    """Builds the ``ORDER BY …`` clause.

    Sort fields are raw identifiers: SQL cannot bind identifiers, so the
    caller is responsible for only passing trusted column names.
    """

    def build(self, sorts: Sequence[SortOrder]) -> str:
        if not sorts:
            return ""
        parts = [f"{s.field} {SortDirection(s.direction).value}" for s in sorts]
        return f"ORDER BY {', '.join(parts)}"


class PaginationClauseBuilder:
    """Builds ``LIMIT`` / ``OFFSET``; each is emitted only when set."""

    def build(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None and limit >= 0:
            parts.append(f"LIMIT {int(limit)}")
        if offset is not None and offset >= 0:
            parts.append(f"OFFSET {int(offset)}")
        return " ".join(parts)
