"""Explicit validation of faculty payloads and the pre-persistence invariants."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from app.core.exceptions import FacultyValidationError

from .eligibility import evaluate_eligibility
from .faculty import PHONE_PATTERN, Department, Designation, FacultyDomain, FacultyStatus


def collect_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flattens every Pydantic error into {field, message} pairs."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        message = error["msg"].removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


def validate_faculty(payload: Mapping[str, Any]) -> FacultyDomain:
    """Validates and normalizes a raw payload.

    Raises:
        FacultyValidationError: With every violated constraint, not only the first.
    """
    try:
        return FacultyDomain.model_validate(payload)
    except ValidationError as e:
        raise FacultyValidationError(collect_errors(e)) from e


def assert_persistable(faculty: FacultyDomain, now: datetime) -> None:
    """Re-checks the declared invariants right before a write.

    Domain objects can be mutated after validation, so this runs on the
    exact object about to be stored.
    """
    errors: list[dict[str, str]] = []

    for field, value, enum in (
        ("department", faculty.department, Department),
        ("designation", faculty.designation, Designation),
        ("status", faculty.status, FacultyStatus),
    ):
        if value not in {member.value for member in enum}:
            errors.append({"field": field, "message": f"Invalid {field}"})

    for group in ("experience", "publications"):
        for name, count in getattr(faculty, group).model_dump().items():
            if count < 0:
                errors.append({"field": f"{group}.{name}", "message": "Must not be negative"})

    if not PHONE_PATTERN.fullmatch(faculty.phone):
        errors.append({"field": "phone", "message": "Phone number must be in format: +91-xxxxxxxxxx"})

    if faculty.ratification_status.is_eligible != evaluate_eligibility(faculty, now):
        errors.append({
            "field": "ratificationStatus.isEligible",
            "message": "Eligibility is stale; it must be recomputed before saving"
        })

    if errors:
        raise FacultyValidationError(errors)
