"""Core FilterCriteria → SQL compilation logic.

``QueryCompiler`` is the top-level orchestrator.  It validates the criteria,
wires together the clause-level sub-builders for one statement, and joins
the non-empty clauses with single spaces.  All dialect-specific behaviour is
delegated to the injected ``SQLCompiler``.

Sub-builder hierarchy
---------------------
QueryCompiler
  ├── PredicateBuilder         (predicate_builder.py)
  ├── WhereClauseBuilder       (clause_builders.py)
  ├── OrderByClauseBuilder     (clause_builders.py)
  └── PaginationClauseBuilder  (clause_builders.py)

Runtime context
---------------
A fresh :class:`~wyvern.compile.context.RuntimeContext` is created per
statement, so placeholder numbering always restarts at 1 and the compiler
itself holds no mutable state.
"""

from __future__ import annotations

import logging

from wyvern.compile.base import CompiledSQL, SQLCompiler
from wyvern.compile.clause_builders import (
    OrderByClauseBuilder,
    PaginationClauseBuilder,
    WhereClauseBuilder,
)
from wyvern.compile.context import CompilationContext, RuntimeContext
from wyvern.compile.postgres import PostgresCompiler
from wyvern.compile.predicate_builder import PredicateBuilder
from wyvern.query.criteria import FilterCriteria
from wyvern.validate.condition_validator import assert_identifier
from wyvern.validate.criteria_validator import CriteriaValidator

logger = logging.getLogger(__name__)


class QueryCompiler:
    """Compiles a FilterCriteria to parameterized SQL.

    The table name is interpolated as given; it must come from trusted
    code, never from end-user input.

    Args:
        compiler: Dialect-specific compiler.  Defaults to PostgreSQL.
        validator: Criteria validator run before every compilation.
    """

    def __init__(
        self,
        compiler: SQLCompiler | None = None,
        validator: CriteriaValidator | None = None,
    ) -> None:
        self._ctx = CompilationContext(compiler=compiler or PostgresCompiler())
        self._validator = validator or CriteriaValidator()

    @property
    def dialect(self) -> str:
        return self._ctx.compiler.dialect_name

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile_select(self, table: str, criteria: FilterCriteria) -> CompiledSQL:
        """Compile a ``SELECT *`` with WHERE, ORDER BY, LIMIT and OFFSET.

        Example::

            criteria = (
                FilterCriteria.new()
                .with_condition(eq("status", "active"))
                .with_condition(gt("age", 18))
                .with_limit(10)
            )
            QueryCompiler().compile_select("users", criteria)
            # SELECT * FROM users WHERE status = $1 AND age > $2 LIMIT 10
            # params: ["active", 18]

        Raises:
            ValidationError: (or subclass) if the criteria are malformed.
                No SQL is produced in that case.
        """
        return self._compile("select", f"SELECT * FROM {table}", table, criteria, paginate=True)

    def compile_count(self, table: str, criteria: FilterCriteria) -> CompiledSQL:
        """Compile a ``SELECT COUNT(*)`` sharing the WHERE clause.

        ORDER BY, LIMIT and OFFSET are never emitted.
        """
        return self._compile(
            "count", f"SELECT COUNT(*) FROM {table}", table, criteria, paginate=False
        )

    def compile_exists(self, table: str, criteria: FilterCriteria) -> CompiledSQL:
        """Compile ``SELECT EXISTS (SELECT 1 FROM … WHERE …)``."""
        inner = self._compile(
            "exists", f"SELECT 1 FROM {table}", table, criteria, paginate=False
        )
        inner.sql = f"SELECT EXISTS ({inner.sql})"
        return inner

    # ------------------------------------------------------------------
    # Statement assembly
    # ------------------------------------------------------------------

    def _compile(
        self,
        kind: str,
        head: str,
        table: str,
        criteria: FilterCriteria,
        paginate: bool,
    ) -> CompiledSQL:
        assert_identifier(table, "Table")
        self._validator.validate(criteria)

        runtime = RuntimeContext(compiler=self._ctx.compiler)
        parts = [head, WhereClauseBuilder(PredicateBuilder(runtime)).build(criteria.conditions)]
        if paginate:
            parts.append(OrderByClauseBuilder().build(criteria.sorts))
            parts.append(PaginationClauseBuilder().build(criteria.limit, criteria.offset))

        sql = " ".join(p for p in parts if p)
        logger.debug("Compiled %s on %s: %s (%d params)", kind, table, sql, len(runtime.params))
        return CompiledSQL(sql=sql, params=runtime.params, dialect=self.dialect)
