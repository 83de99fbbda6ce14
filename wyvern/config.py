"""Repository configuration.

One :class:`RepositoryConfig` describes one table-backed entity collection::

    users = RepositoryConfig(
        table="users",
        id_column="user_id",
        default_limit=100,   # applied when a criteria has no LIMIT
        max_limit=1000,      # larger limits are rejected
    )

Both variants of the repository contract accept the same config, so a test
suite can swap the SQL repository for the in-memory one without changing
pagination behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass

from wyvern.compile import CompilerFactory, SQLCompiler
from wyvern.validate.condition_validator import assert_identifier


@dataclass(frozen=True)
class RepositoryConfig:
    """Static configuration for one repository.

    Attributes:
        table: Table name (trusted; interpolated into SQL as given).
        id_column: Primary-key column, also the entity attribute holding
            the identifier.
        dialect: Name of a compiler registered with ``CompilerFactory``.
        default_limit: LIMIT injected into criteria that carry none
            (``0`` = no injection).
        max_limit: Largest LIMIT accepted (``0`` = unbounded).
        entity_name: Name used in ``NotFoundError`` messages; defaults to
            the table name.
    """

    table: str
    id_column: str = "id"
    dialect: str = "postgres"
    default_limit: int = 0
    max_limit: int = 0
    entity_name: str | None = None

    def __post_init__(self) -> None:
        assert_identifier(self.table, "Table")
        assert_identifier(self.id_column, "Id column")

    @property
    def entity(self) -> str:
        return self.entity_name or self.table

    def create_compiler(self) -> SQLCompiler:
        """Instantiate the compiler registered for :attr:`dialect`."""
        return CompilerFactory.create(self.dialect)
