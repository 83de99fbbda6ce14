"""wyvern – typed filter criteria compiled to parameterized SQL.

Public API
----------
``compile_select`` / ``compile_count``
    Validate a :class:`FilterCriteria` and compile it for a table.  Every
    value is bound as a positional parameter; nothing caller-supplied is
    spliced into the SQL text except trusted table and column names.

``Repository``
    Async CRUD + filter contract, implemented by :class:`SqlRepository`
    (asyncpg) and :class:`InMemoryRepository` (tests).

``Transaction``
    Async context manager scoping several repository calls to one
    database transaction.

Re-exported types
-----------------
Conditions and their constructors, ``FilterCriteria``, ``Pagination`` /
``Page``, ``CompiledSQL``, ``RepositoryConfig``, mappers, and all error
classes.

Extensibility
-------------
New dialect compilers can be registered via::

    from wyvern.compile.registry import CompilerFactory

    @CompilerFactory.register("mysql")
    class MySQLCompiler(SQLCompiler):
        def param_placeholder(self, index: int) -> str:
            return "%s"

and then selected with ``RepositoryConfig(table, dialect="mysql")``.
"""

from __future__ import annotations

from wyvern.adapters.asyncpg import AsyncpgAdapter
from wyvern.compile import (
    CompiledSQL,
    CompilerFactory,
    MutationBuilder,
    OperatorRegistry,
    PostgresCompiler,
    QueryCompiler,
    SQLCompiler,
    SQLiteCompiler,
)
from wyvern.config import RepositoryConfig
from wyvern.errors import (
    CompilationError,
    ConstraintViolationError,
    EmptyFieldError,
    EmptyListError,
    InvalidPaginationError,
    InvalidValueError,
    NotFoundError,
    OperatorValueMismatchError,
    QueryError,
    StorageConnectionError,
    StorageError,
    StorageTimeoutError,
    TransactionError,
    ValidationError,
    WyvernError,
)
from wyvern.mapping import EntityMapper, PydanticMapper
from wyvern.policy import CriteriaPolicy
from wyvern.query import (
    Condition,
    FilterCriteria,
    Operator,
    Page,
    Pagination,
    SortDirection,
    SortOrder,
    asc,
    desc,
    eq,
    gt,
    gte,
    in_list,
    is_not_null,
    is_null,
    like,
    lt,
    lte,
    ne,
    not_in,
    not_like,
)
from wyvern.repository import InMemoryRepository, Repository, SqlRepository, paginate
from wyvern.transaction import Transaction

__all__ = [
    # Core pipeline
    "compile_select",
    "compile_count",
    # Query model
    "Condition",
    "FilterCriteria",
    "Operator",
    "SortDirection",
    "SortOrder",
    "Pagination",
    "Page",
    "asc",
    "desc",
    "eq",
    "ne",
    "gt",
    "gte",
    "lt",
    "lte",
    "like",
    "not_like",
    "in_list",
    "not_in",
    "is_null",
    "is_not_null",
    # Compilation
    "CompiledSQL",
    "CompilerFactory",
    "MutationBuilder",
    "OperatorRegistry",
    "PostgresCompiler",
    "QueryCompiler",
    "SQLCompiler",
    "SQLiteCompiler",
    # Repositories
    "Repository",
    "RepositoryConfig",
    "CriteriaPolicy",
    "EntityMapper",
    "PydanticMapper",
    "InMemoryRepository",
    "SqlRepository",
    "AsyncpgAdapter",
    "Transaction",
    "paginate",
    # Errors
    "WyvernError",
    "ValidationError",
    "EmptyFieldError",
    "OperatorValueMismatchError",
    "EmptyListError",
    "InvalidValueError",
    "InvalidPaginationError",
    "CompilationError",
    "StorageError",
    "ConstraintViolationError",
    "StorageConnectionError",
    "StorageTimeoutError",
    "QueryError",
    "TransactionError",
    "NotFoundError",
]


def compile_select(table: str, criteria: FilterCriteria, dialect: str = "postgres") -> CompiledSQL:
    """Validate ``criteria`` and compile a ``SELECT *`` on ``table``.

    Example::

        compiled = wyvern.compile_select(
            "users",
            FilterCriteria.new().with_condition(eq("status", "active")).with_limit(10),
        )
        rows = await pool.fetch(compiled.sql, *compiled.as_args())

    Args:
        table: Trusted table name.
        criteria: Conditions, sort orders and pagination.
        dialect: Name of a compiler registered with ``CompilerFactory``.

    Returns:
        ``CompiledSQL`` with the ``sql`` text and ordered ``params``.

    Raises:
        ValidationError: (or subclass) if the criteria are malformed.
        CompilationError: If ``dialect`` is not registered.
    """
    return QueryCompiler(CompilerFactory.create(dialect)).compile_select(table, criteria)


def compile_count(table: str, criteria: FilterCriteria, dialect: str = "postgres") -> CompiledSQL:
    """Validate ``criteria`` and compile a ``SELECT COUNT(*)`` on ``table``.

    ORDER BY, LIMIT and OFFSET on ``criteria`` are ignored.
    """
    return QueryCompiler(CompilerFactory.create(dialect)).compile_count(table, criteria)
