"""wyvern compilation layer: FilterCriteria → parameterized SQL."""
from wyvern.compile.base import CompiledSQL, SQLCompiler
from wyvern.compile.builder import QueryCompiler
from wyvern.compile.mutations import MutationBuilder
from wyvern.compile.postgres import PostgresCompiler
from wyvern.compile.registry import CompilerFactory, OperatorRegistry
from wyvern.compile.sqlite import SQLiteCompiler

CompilerFactory.register("postgres", PostgresCompiler)
CompilerFactory.register("sqlite", SQLiteCompiler)

__all__ = [
    "CompiledSQL",
    "CompilerFactory",
    "MutationBuilder",
    "OperatorRegistry",
    "PostgresCompiler",
    "QueryCompiler",
    "SQLCompiler",
    "SQLiteCompiler",
]
