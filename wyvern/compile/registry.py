"""Registries for dialect compilers and operator renderers.

Both are class-level tables filled at import time by
:mod:`wyvern.compile` and open to third-party additions::

    @CompilerFactory.register("mysql")
    class MySQLCompiler(SQLCompiler):
        ...

    RepositoryConfig("users", dialect="mysql")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar, Optional

from wyvern.compile.base import SQLCompiler
from wyvern.errors import CompilationError
from wyvern.query.operators import Operator
from wyvern.query.values import ConditionValue

CompilerClass = type[SQLCompiler]

# ---------------------------------------------------------------------------
# Dialect compilers
# ---------------------------------------------------------------------------


class CompilerFactory:
    """Dialect name -> :class:`SQLCompiler` subclass.

    Names are matched case-insensitively, so ``"Postgres"`` and
    ``"postgres"`` resolve to the same compiler.
    """

    _by_dialect: ClassVar[dict[str, CompilerClass]] = {}

    @classmethod
    def register(cls, dialect: str, compiler_cls: Optional[CompilerClass] = None):
        """Bind ``dialect`` to a compiler class.

        Called with the class, registers it directly; called with only the
        name, returns a class decorator.  A later registration replaces an
        earlier one.
        """
        key = dialect.strip().lower()
        if not key:
            raise CompilationError("Dialect name must not be empty.")

        def bind(target: CompilerClass) -> CompilerClass:
            cls._by_dialect[key] = target
            return target

        return bind if compiler_cls is None else bind(compiler_cls)

    @classmethod
    def create(cls, dialect: str) -> SQLCompiler:
        compiler_cls = cls._by_dialect.get(dialect.strip().lower())
        if compiler_cls is None:
            raise CompilationError(
                f"No compiler for dialect {dialect!r}; known dialects: {', '.join(cls.dialects())}."
            )
        return compiler_cls()

    @classmethod
    def dialects(cls) -> list[str]:
        return sorted(cls._by_dialect)


# ---------------------------------------------------------------------------
# Operator renderers
# ---------------------------------------------------------------------------

#: ``(field, value, bind) -> sql_fragment``; ``bind(value)`` stores a
#: parameter and returns its placeholder.
OperatorHandler = Callable[[str, ConditionValue, Callable[[object], str]], str]


class OperatorRegistry:
    """Operator -> SQL rendering handler, consulted by the predicate builder.

    Replacing a handler changes how every dialect renders that operator::

        @OperatorRegistry.register(Operator.LIKE)
        def _ilike(field, value, bind):
            return f"{field} ILIKE {bind(value)}"
    """

    _handlers: ClassVar[dict[Operator, OperatorHandler]] = {}

    @classmethod
    def register(cls, operator: Operator, handler: Optional[OperatorHandler] = None):
        """Bind ``operator`` to ``handler``, or return a decorator that does."""

        def bind(target: OperatorHandler) -> OperatorHandler:
            cls._handlers[Operator(operator)] = target
            return target

        return bind if handler is None else bind(handler)

    @classmethod
    def get(cls, operator: Operator) -> OperatorHandler | None:
        return cls._handlers.get(operator)

    @classmethod
    def operators(cls) -> list[Operator]:
        return sorted(cls._handlers, key=lambda op: op.value)
