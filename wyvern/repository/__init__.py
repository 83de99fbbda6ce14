"""Repository contract and its in-memory and SQL implementations."""
from wyvern.repository.base import Repository
from wyvern.repository.evaluator import CriteriaEvaluator, like_to_regex
from wyvern.repository.memory import InMemoryRepository
from wyvern.repository.pagination import paginate
from wyvern.repository.sql import SqlRepository

__all__ = [
    "CriteriaEvaluator",
    "InMemoryRepository",
    "Repository",
    "SqlRepository",
    "like_to_regex",
    "paginate",
]
