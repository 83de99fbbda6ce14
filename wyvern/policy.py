"""Criteria policy: LIMIT defaults and bounds.

``CriteriaPolicy`` runs after structural validation and before compilation
or in-memory evaluation.  It enforces:

* **Default limit** – criteria without a LIMIT receive
  :attr:`RepositoryConfig.default_limit` (when non-zero).
* **Maximum limit** – a LIMIT above :attr:`RepositoryConfig.max_limit`
  (when non-zero) is rejected with
  :class:`~wyvern.errors.InvalidPaginationError`.

The policy never mutates its input; it returns a new FilterCriteria.
"""

from __future__ import annotations

from wyvern.config import RepositoryConfig
from wyvern.errors import InvalidPaginationError
from wyvern.query.criteria import FilterCriteria


class CriteriaPolicy:
    """Applies a :class:`RepositoryConfig`'s pagination rules to criteria."""

    def __init__(self, config: RepositoryConfig) -> None:
        self._config = config

    def apply(self, criteria: FilterCriteria) -> FilterCriteria:
        """Return ``criteria`` with the configured LIMIT rules applied.

        Raises:
            InvalidPaginationError: If the LIMIT exceeds ``max_limit``.
        """
        max_limit = self._config.max_limit
        if criteria.limit is None:
            if self._config.default_limit:
                return criteria.with_limit(self._config.default_limit)
            return criteria
        if max_limit and criteria.limit > max_limit:
            raise InvalidPaginationError(
                "limit", criteria.limit, f"exceeds max_limit={max_limit}"
            )
        return criteria
