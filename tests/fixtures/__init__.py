"""Test fixtures: sample entities, seed rows and PostgreSQL DDL."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

_FIXTURES_DIR = Path(__file__).parent


class User(BaseModel):
    """Entity stored in the ``users`` table of ``ddl_postgres.sql``."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[int] = None
    name: str
    email: Optional[str] = None
    status: str = "active"
    age: Optional[int] = None


SEED_USERS: list[dict[str, Any]] = [
    {"id": 1, "name": "alice", "email": "alice@example.com", "status": "active", "age": 34},
    {"id": 2, "name": "bob", "email": None, "status": "active", "age": 17},
    {"id": 3, "name": "carol", "email": "carol@example.org", "status": "inactive", "age": 52},
    {"id": 4, "name": "dave", "email": "dave@example.com", "status": "active", "age": None},
    {"id": 5, "name": "erin", "email": "erin_1@example.com", "status": "banned", "age": 29},
]


def seed_users() -> list[User]:
    return [User(**row) for row in SEED_USERS]


def load_ddl() -> str:
    """Return the PostgreSQL DDL for the sample schema."""
    return (_FIXTURES_DIR / "ddl_postgres.sql").read_text()
