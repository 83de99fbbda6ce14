"""Database adapters binding compiled SQL to concrete drivers."""
from wyvern.adapters.asyncpg import AsyncpgAdapter, translate_error, translated_errors

__all__ = ["AsyncpgAdapter", "translate_error", "translated_errors"]
