"""Page-at-a-time queries over any conforming repository."""

from __future__ import annotations

from typing import TypeVar

from wyvern.query.criteria import FilterCriteria
from wyvern.query.pagination import Page, Pagination
from wyvern.repository.base import Repository

T = TypeVar("T")


async def paginate(
    repository: Repository[T, object],
    criteria: FilterCriteria,
    pagination: Pagination,
) -> Page[T]:
    """Return one page of entities plus the total match count.

    Any LIMIT/OFFSET already on ``criteria`` is replaced by the page
    window; the count ignores them.

    Args:
        repository: Any implementation of the Repository protocol.
        criteria: Conditions and sort orders to apply.
        pagination: The page to fetch.

    Returns:
        :class:`~wyvern.query.pagination.Page` with the page items.
    """
    # A transaction connection runs one statement at a time.
    total = await repository.count(criteria.without_pagination())
    items = await repository.filter(criteria.with_pagination(pagination))
    return Page(
        items=items,
        page=pagination.page,
        per_page=pagination.per_page,
        total_items=total,
    )
