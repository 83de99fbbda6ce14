"""wyvern validation layer: criteria invariants checked before compilation."""
from wyvern.validate.condition_validator import ConditionValidator, SortValidator
from wyvern.validate.criteria_validator import CriteriaValidator, PaginationValidator

__all__ = [
    "ConditionValidator",
    "CriteriaValidator",
    "PaginationValidator",
    "SortValidator",
]
