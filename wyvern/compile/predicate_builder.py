"""Condition-to-SQL rendering.

The built-in operator handlers are registered with
:class:`~wyvern.compile.registry.OperatorRegistry` when this module is
imported.  ``PredicateBuilder`` renders one condition by dispatching to the
registered handler, binding every value through the statement's
:class:`~wyvern.compile.context.RuntimeContext`.
"""
from __future__ import annotations

from collections.abc import Callable

from wyvern.compile.context import RuntimeContext
from wyvern.compile.registry import OperatorHandler, OperatorRegistry
from wyvern.errors import CompilationError
from wyvern.query.condition import Condition
from wyvern.query.operators import (
    MEMBERSHIP_OPS,
    NULL_OPS,
    SCALAR_OPS,
    SQL_OPERATORS,
    Operator,
)
from wyvern.query.values import ConditionValue

# ---------------------------------------------------------------------------
# Built-in operator handlers
# ---------------------------------------------------------------------------


def _scalar_handler(keyword: str) -> OperatorHandler:
    def handler(field: str, value: ConditionValue, bind: Callable[[object], str]) -> str:
        return f"{field} {keyword} {bind(value)}"

    return handler


def _membership_handler(keyword: str) -> OperatorHandler:
    def handler(field: str, value: ConditionValue, bind: Callable[[object], str]) -> str:
        if not isinstance(value, tuple) or not value:
            raise CompilationError(
                f"{keyword} on '{field}' has no values to bind.", clause="WHERE"
            )
        placeholders = ", ".join(bind(item) for item in value)
        return f"{field} {keyword} ({placeholders})"

    return handler


def _null_handler(keyword: str) -> OperatorHandler:
    def handler(field: str, value: ConditionValue, bind: Callable[[object], str]) -> str:
        return f"{field} {keyword}"

    return handler


for _op in SCALAR_OPS:
    OperatorRegistry.register(_op, _scalar_handler(SQL_OPERATORS[_op]))
for _op in MEMBERSHIP_OPS:
    OperatorRegistry.register(_op, _membership_handler(SQL_OPERATORS[_op]))
for _op in NULL_OPS:
    OperatorRegistry.register(_op, _null_handler(SQL_OPERATORS[_op]))


# ---------------------------------------------------------------------------
# Predicate builder
# ---------------------------------------------------------------------------


class PredicateBuilder:
    """Compiles single conditions (WHERE terms) to SQL.

    Args:
        runtime: Parameter accumulator for the statement being compiled.
    """

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, condition: Condition) -> str:
        """Compile ``condition`` to a SQL fragment, binding its values."""
        handler = OperatorRegistry.get(Operator(condition.operator))
        if handler is None:
            raise CompilationError(
                f"No SQL renderer registered for operator '{condition.operator}'.",
                clause="WHERE",
            )
        return handler(condition.field, condition.value, self._runtime.bind)
