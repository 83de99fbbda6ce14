"""Parameterized CRUD statements for the SQL-backed repository.

Every value is bound through the same placeholder seam as
:class:`~wyvern.compile.builder.QueryCompiler`; table and column names are
interpolated as given and must be trusted.  Column order follows the key
order of the mapping passed in.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wyvern.compile.base import CompiledSQL, SQLCompiler
from wyvern.compile.context import CompilationContext, RuntimeContext
from wyvern.compile.postgres import PostgresCompiler
from wyvern.errors import InvalidValueError
from wyvern.validate.condition_validator import assert_identifier


class MutationBuilder:
    """Builds INSERT / UPDATE / DELETE / primary-key SELECT statements.

    Args:
        compiler: Dialect-specific compiler.  Defaults to PostgreSQL.
    """

    def __init__(self, compiler: SQLCompiler | None = None) -> None:
        self._ctx = CompilationContext(compiler=compiler or PostgresCompiler())

    def _runtime(self) -> RuntimeContext:
        return RuntimeContext(compiler=self._ctx.compiler)

    def _compiled(self, sql: str, runtime: RuntimeContext) -> CompiledSQL:
        return CompiledSQL(sql=sql, params=runtime.params, dialect=self._ctx.compiler.dialect_name)

    @staticmethod
    def _check_columns(table: str, values: Mapping[str, Any]) -> None:
        assert_identifier(table, "Table")
        for column in values:
            assert_identifier(column, "Column")

    def insert(self, table: str, values: Mapping[str, Any]) -> CompiledSQL:
        """``INSERT INTO t (a, b) VALUES ($1, $2) RETURNING *``"""
        self._check_columns(table, values)
        runtime = self._runtime()
        if not values:
            return self._compiled(f"INSERT INTO {table} DEFAULT VALUES RETURNING *", runtime)
        columns = ", ".join(values)
        placeholders = ", ".join(runtime.bind(v) for v in values.values())
        sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *"
        return self._compiled(sql, runtime)

    def update(
        self,
        table: str,
        id_column: str,
        entity_id: Any,
        values: Mapping[str, Any],
    ) -> CompiledSQL:
        """``UPDATE t SET a = $1, b = $2 WHERE id = $3 RETURNING *``

        Raises:
            InvalidValueError: If ``values`` is empty.
        """
        self._check_columns(table, values)
        assert_identifier(id_column, "Id column")
        if not values:
            raise InvalidValueError(f"UPDATE on {table} requires at least one column.", values)
        runtime = self._runtime()
        assignments = ", ".join(f"{col} = {runtime.bind(v)}" for col, v in values.items())
        where = f"{id_column} = {runtime.bind(entity_id)}"
        return self._compiled(f"UPDATE {table} SET {assignments} WHERE {where} RETURNING *", runtime)

    def delete(self, table: str, id_column: str, entity_id: Any) -> CompiledSQL:
        """``DELETE FROM t WHERE id = $1 RETURNING id``"""
        assert_identifier(table, "Table")
        assert_identifier(id_column, "Id column")
        runtime = self._runtime()
        sql = f"DELETE FROM {table} WHERE {id_column} = {runtime.bind(entity_id)} RETURNING {id_column}"
        return self._compiled(sql, runtime)

    def select_by_id(self, table: str, id_column: str, entity_id: Any) -> CompiledSQL:
        """``SELECT * FROM t WHERE id = $1``"""
        assert_identifier(table, "Table")
        assert_identifier(id_column, "Id column")
        runtime = self._runtime()
        return self._compiled(
            f"SELECT * FROM {table} WHERE {id_column} = {runtime.bind(entity_id)}", runtime
        )
