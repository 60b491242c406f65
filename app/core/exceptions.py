"""
Typed errors raised by the faculty registry core.

Services raise these and never translate them into transport responses;
the API layer maps each one to an HTTP status via exception handlers.

Usage:
    from app.core.exceptions import FacultyNotFoundError

    if record is None:
        raise FacultyNotFoundError(faculty_id)
"""

from typing import Any


class FacultyRegistryError(Exception):
    """Base exception for all faculty registry errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class FacultyValidationError(FacultyRegistryError):
    """One or more field constraints were violated.

    Carries every violation, not only the first one found.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(
            f"Validation failed for: {fields}",
            code="VALIDATION_ERROR",
            details={"errors": errors}
        )


class DuplicateFieldError(FacultyRegistryError):
    """A unique field (email or employeeId) is already in use."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"{field} already exists",
            code="DUPLICATE_FIELD",
            details={"field": field, "value": value}
        )


class FacultyNotFoundError(FacultyRegistryError):
    def __init__(self, faculty_id: str) -> None:
        super().__init__(
            f"Faculty with ID '{faculty_id}' not found",
            code="FACULTY_NOT_FOUND",
            details={"faculty_id": faculty_id}
        )


class InvalidIdentifierError(FacultyRegistryError):
    def __init__(self, value: Any) -> None:
        super().__init__(
            "Invalid faculty ID format",
            code="INVALID_IDENTIFIER",
            details={"faculty_id": str(value)}
        )


class IneligibleForRatificationError(FacultyRegistryError):
    """Ratification was attempted on a record that does not qualify."""

    def __init__(self, faculty_id: str) -> None:
        super().__init__(
            "Faculty does not meet ratification criteria",
            code="NOT_ELIGIBLE",
            details={"faculty_id": faculty_id}
        )


class StorageUnavailableError(FacultyRegistryError):
    """The underlying store is unreachable or failed the operation."""

    def __init__(self, action: str) -> None:
        super().__init__(
            f"Storage unavailable during {action}",
            code="STORAGE_UNAVAILABLE",
            details={"action": action}
        )
