"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``QueryCompiler`` owns the algorithm for assembling every clause.
- ``SQLCompiler`` subclasses supply the one dialect-specific step, the
  positional placeholder text, so supporting a new dialect touches a single
  method.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful compilation.

    Attributes:
        sql: The compiled SQL string with positional placeholders.
        params: Values for the placeholders; ``params[i]`` binds to
            placeholder ``i + 1``.
        dialect: The target dialect (e.g. ``'postgres'``).
    """

    sql: str
    params: list[Any] = field(default_factory=list)
    dialect: str = "postgres"

    def as_args(self) -> tuple[Any, ...]:
        """Return the parameters as a tuple for ``execute(sql, *args)`` drivers."""
        return tuple(self.params)


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers."""

    @abstractmethod
    def param_placeholder(self, index: int) -> str:
        """Return the SQL placeholder string for a positional parameter.

        Args:
            index: 1-based parameter position.

        Returns:
            Dialect-specific placeholder string.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (``'postgres'``, ``'sqlite'`` …)."""
