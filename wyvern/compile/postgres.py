"""PostgreSQL dialect compiler."""

from __future__ import annotations

from wyvern.compile.base import SQLCompiler


class PostgresCompiler(SQLCompiler):
    """Compiles FilterCriteria to PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``$1, $2, …`` – the native positional style of the
    PostgreSQL wire protocol, as used by ``asyncpg``.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def param_placeholder(self, index: int) -> str:
        return f"${index}"
