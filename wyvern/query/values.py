"""ConditionValue: the values a filter condition may compare against.

Values are plain Python objects rather than wrapper classes::

    None          -> Null
    True / False  -> Boolean
    42            -> Integer
    4.2           -> Float
    "text"        -> String
    ("a", "b")    -> List (scalars only, never nested)

``bool`` is a subclass of ``int`` in Python; it is always classified as
Boolean, never as Integer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from wyvern.errors import InvalidValueError

#: A single non-list condition value.
Scalar = Union[None, bool, int, float, str]

#: Any condition value, including a flat list of scalars.
ConditionValue = Union[Scalar, tuple[Scalar, ...]]


class ValueKind(str, Enum):
    """The tag of a ConditionValue."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    LIST = "list"


def scalar_kind(value: Any) -> ValueKind | None:
    """Return the kind of a scalar value, or ``None`` if it is not one."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    return None


def value_kind(value: Any) -> ValueKind:
    """Classify ``value`` as one ConditionValue kind.

    Raises:
        InvalidValueError: If ``value`` is not representable, or is a list
            containing a list.
    """
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, (list, tuple)):
                raise InvalidValueError("A list value must not contain another list.", value)
            if scalar_kind(item) is None:
                raise InvalidValueError(
                    f"Unsupported list element type: {type(item).__name__}.", item
                )
        return ValueKind.LIST
    kind = scalar_kind(value)
    if kind is None:
        raise InvalidValueError(f"Unsupported condition value type: {type(value).__name__}.", value)
    return kind


def normalize_value(value: Any) -> ConditionValue:
    """Return ``value`` with any list converted to an immutable tuple."""
    if isinstance(value, list):
        return tuple(value)
    return value
