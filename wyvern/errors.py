"""Custom exception hierarchy for wyvern.

All public errors inherit from WyvernError so callers can catch the base
class for any wyvern-specific failure.

Four families are exposed:

* ``ValidationError`` – malformed criteria; raised before any SQL is built
  or any storage is touched.
* ``CompilationError`` – unexpected state inside the compiler.
* ``StorageError`` – a driver-reported failure, wrapped with the operation
  and entity identity that were in flight.
* ``NotFoundError`` – read/update/delete addressed an absent entity.
"""
from __future__ import annotations

from typing import Any


class WyvernError(Exception):
    """Base exception for all wyvern errors."""


class ValidationError(WyvernError):
    """Raised when a Condition, SortOrder or FilterCriteria is malformed.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. EMPTY_LIST).
        details: Extra context about the offending input.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for API payloads."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class EmptyFieldError(ValidationError):
    """Raised when a condition, sort or statement names an empty identifier."""

    def __init__(self, where: str) -> None:
        super().__init__(
            f"{where} name must be a non-empty string.",
            code="EMPTY_FIELD",
            details={"where": where},
        )


class OperatorValueMismatchError(ValidationError):
    """Raised when a value's shape is not accepted by the operator."""

    def __init__(self, field: str, operator: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Operator {operator} on '{field}' requires {expected}, got {actual}.",
            code="OPERATOR_VALUE_MISMATCH",
            details={
                "field": field,
                "operator": operator,
                "expected": expected,
                "actual": actual,
            },
        )


class EmptyListError(ValidationError):
    """Raised when IN / NOT IN is given an empty list."""

    def __init__(self, field: str, operator: str) -> None:
        super().__init__(
            f"Operator {operator} on '{field}' requires a non-empty list.",
            code="EMPTY_LIST",
            details={"field": field, "operator": operator},
        )


class InvalidValueError(ValidationError):
    """Raised when a value cannot be represented as a ConditionValue."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(
            message,
            code="INVALID_VALUE",
            details={"type": type(value).__name__},
        )


class InvalidPaginationError(ValidationError):
    """Raised when LIMIT / OFFSET / page numbers are out of range."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        super().__init__(
            f"{name}={value!r} is invalid: {reason}.",
            code="INVALID_PAGINATION",
            details={"name": name, "value": value},
        )


class CompilationError(WyvernError):
    """Raised when SQL compilation fails for an unexpected reason.

    Validation runs before compilation, so reaching this error indicates an
    internal inconsistency (e.g. an operator with no registered renderer).

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class StorageError(WyvernError):
    """Raised when the storage driver reports a failure.

    The original driver exception is chained as ``__cause__``.

    Args:
        message: Human-readable description.
        operation: Repository operation in flight (``"read"``, ``"filter"`` …).
        entity_id: Identity of the entity involved, when known.
        retryable: Hint for the caller's retry policy.  This layer never
            retries on its own.
    """

    retryable_default = False

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        entity_id: Any = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.entity_id = entity_id
        self.retryable = self.retryable_default if retryable is None else retryable


class ConstraintViolationError(StorageError):
    """An integrity constraint (unique, foreign key, check …) was violated."""


class StorageConnectionError(StorageError):
    """The connection to the database failed or was lost."""

    retryable_default = True


class StorageTimeoutError(StorageError):
    """The statement timed out or was cancelled by the server."""

    retryable_default = True


class QueryError(StorageError):
    """Any other driver-reported statement failure."""


class TransactionError(StorageError):
    """Beginning, committing or rolling back a transaction failed."""


class NotFoundError(WyvernError):
    """Raised when read/update/delete addresses an absent entity.

    Args:
        entity: Entity kind or table name.
        entity_id: The identifier that was not found.
    """

    def __init__(self, entity: str, entity_id: Any) -> None:
        super().__init__(f"{entity} with id {entity_id!r} not found.")
        self.entity = entity
        self.entity_id = entity_id
