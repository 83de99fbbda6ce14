"""Pagination parameters and result pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from wyvern.errors import InvalidPaginationError

T = TypeVar("T")


class Pagination(BaseModel):
    """1-based page number and page size.

    Attributes:
        page: Page number, starting at 1.
        per_page: Number of items per page.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    page: int = 1
    per_page: int = 20

    @model_validator(mode="before")
    @classmethod
    def _check_range(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in ("page", "per_page"):
                value = data.get(name, 1)
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidPaginationError(name, value, "must be an integer")
                if value < 1:
                    raise InvalidPaginationError(name, value, "must be at least 1")
        return data

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of results with metadata.

    Attributes:
        items: Entities on this page.
        page: 1-based page number.
        per_page: Requested page size.
        total_items: Number of entities matching the criteria overall.
    """

    items: list[T]
    page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return (self.total_items + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next else None

    @property
    def previous_page(self) -> int | None:
        return self.page - 1 if self.has_previous else None
