"""wyvern query models: conditions, sort orders, criteria and pagination."""
from wyvern.query.condition import (
    Condition,
    SortOrder,
    asc,
    desc,
    eq,
    gt,
    gte,
    in_list,
    is_not_null,
    is_null,
    like,
    lt,
    lte,
    ne,
    not_in,
    not_like,
)
from wyvern.query.criteria import FilterCriteria
from wyvern.query.operators import Operator, SortDirection
from wyvern.query.pagination import Page, Pagination
from wyvern.query.values import ConditionValue, Scalar, ValueKind, value_kind

__all__ = [
    "Condition",
    "ConditionValue",
    "FilterCriteria",
    "Operator",
    "Page",
    "Pagination",
    "Scalar",
    "SortDirection",
    "SortOrder",
    "ValueKind",
    "asc",
    "desc",
    "eq",
    "gt",
    "gte",
    "in_list",
    "is_not_null",
    "is_null",
    "like",
    "lt",
    "lte",
    "ne",
    "not_in",
    "not_like",
    "value_kind",
]
