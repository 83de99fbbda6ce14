"""SQLite dialect compiler."""
from __future__ import annotations

from wyvern.compile.base import SQLCompiler


class SQLiteCompiler(SQLCompiler):
    """Compiles FilterCriteria to SQLite-flavoured parameterized SQL.

    Parameter style: ``?1, ?2, …`` – numbered positional parameters, bound
    from a sequence by Python's built-in ``sqlite3`` (``cursor.execute(sql, params)``).
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def param_placeholder(self, index: int) -> str:
        return f"?{index}"
