"""Compilation context value objects.

``CompilationContext`` carries the static configuration of a compiler
(the dialect) and ``RuntimeContext`` carries the per-statement parameter
state.  A fresh ``RuntimeContext`` is created for every statement, so
compilation is re-entrant and safe to run from any number of concurrent
callers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wyvern.compile.base import SQLCompiler


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context shared by every sub-builder of one compiler.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
    """

    compiler: SQLCompiler


@dataclass
class RuntimeContext:
    """Accumulates positional parameters during a single compilation run.

    Placeholder indices are assigned in bind order starting at 1, so the
    left-to-right order of placeholders in the SQL text always matches the
    order of ``params``.
    """

    compiler: SQLCompiler
    params: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> str:
        """Store a value and return its placeholder text."""
        self.params.append(value)
        return self.compiler.param_placeholder(len(self.params))
