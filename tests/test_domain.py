from collections.abc import Callable
from typing import Any

import pytest
from pydantic import ValidationError

from app.core.exceptions import FacultyValidationError
from app.domain.faculty import FacultyDomain, FacultyStatus, full_name
from app.domain.validation import assert_persistable, validate_faculty

from conftest import FIXED_NOW

Payload = Callable[..., dict[str, Any]]


# --- 1. Normalization ---

def test_fields_are_trimmed_and_normalized(make_payload: Payload) -> None:
    faculty = validate_faculty(make_payload(
        firstName="  Asha ",
        lastName=" Rao ",
        email="  Asha.Rao@JNTUK.edu.in ",
        employeeId=" jntuk042 ",
    ))
    assert faculty.first_name == "Asha"
    assert faculty.last_name == "Rao"
    assert faculty.email == "asha.rao@jntuk.edu.in"
    assert faculty.employee_id == "JNTUK042"


def test_defaults_are_applied(make_payload: Payload) -> None:
    payload = make_payload(experience={"teaching": 2})
    del payload["publications"]
    faculty = validate_faculty(payload)

    assert faculty.experience.industry == 0
    assert faculty.experience.research == 0
    assert faculty.publications.total() == 0
    assert faculty.status == FacultyStatus.ACTIVE.value
    assert faculty.ratification_status.is_ratified is False
    assert faculty.ratification_status.is_eligible is False
    assert faculty.documents == []
    assert faculty.address is None


def test_snake_case_input_is_accepted(make_payload: Payload) -> None:
    payload = make_payload()
    snake = {
        "first_name": payload["firstName"],
        "last_name": payload["lastName"],
        "email": payload["email"],
        "employee_id": payload["employeeId"],
        "department": payload["department"],
        "designation": payload["designation"],
        "date_of_joining": payload["dateOfJoining"],
        "qualifications": payload["qualifications"],
        "experience": payload["experience"],
        "phone": payload["phone"],
    }
    assert validate_faculty(snake).employee_id == payload["employeeId"].upper()


def test_full_name_is_derived(make_payload: Payload) -> None:
    faculty = validate_faculty(make_payload(firstName="Jane", lastName="Smith"))
    assert full_name(faculty) == "Jane Smith"
    assert faculty.full_name == "Jane Smith"
    assert faculty.model_dump(by_alias=True)["fullName"] == "Jane Smith"

    renamed = faculty.model_copy(update={"last_name": "Doe"})
    assert renamed.full_name == "Jane Doe"


def test_serializes_with_camel_case_aliases(make_payload: Payload) -> None:
    dumped = validate_faculty(make_payload()).model_dump(by_alias=True, mode="json")
    assert "employeeId" in dumped
    assert "dateOfJoining" in dumped
    assert dumped["ratificationStatus"]["isEligible"] is False


# --- 2. Field constraints ---

@pytest.mark.parametrize("phone", [
    "+91-987654321",
    "9876543210",
    "+91 9876543210",
    "+92-9876543210",
    "+91-98765432101",
    "+91-\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669\u0660",
])
def test_phone_must_match_canonical_shape(make_payload: Payload, phone: str) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(phone=phone))
    assert [e["field"] for e in exc_info.value.errors] == ["phone"]


@pytest.mark.parametrize("email", [
    "plainaddress",
    "no-at.example.com",
    "a@b",
    "a@b.toolong",
    "a b@c.com",
    "jos\u00e9@jntuk.edu.in",
    "asha@jntuk.\u00e9du.in",
])
def test_email_must_match_pattern(make_payload: Payload, email: str) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(email=email))
    assert exc_info.value.errors[0] == {"field": "email", "message": "Invalid email format"}


def test_name_length_is_limited(make_payload: Payload) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(firstName="A" * 51))
    assert exc_info.value.errors[0]["field"] == "firstName"


def test_qualifications_must_not_be_empty(make_payload: Payload) -> None:
    with pytest.raises(FacultyValidationError):
        validate_faculty(make_payload(qualifications=[]))
    with pytest.raises(FacultyValidationError):
        validate_faculty(make_payload(qualifications=["Ph.D", "  "]))


def test_enumerations_reject_unknown_values(make_payload: Payload) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(department="Physics", designation="Lecturer", status="Retired"))
    fields = {e["field"] for e in exc_info.value.errors}
    assert fields == {"department", "designation", "status"}


def test_counters_cannot_be_negative(make_payload: Payload) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(
            experience={"teaching": -1, "research": -2},
            publications={"books": -1},
        ))
    fields = {e["field"] for e in exc_info.value.errors}
    assert fields == {"experience.teaching", "experience.research", "publications.books"}


def test_every_violation_is_reported() -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty({"email": "bad", "phone": "123"})

    fields = {e["field"] for e in exc_info.value.errors}
    for required in ("firstName", "lastName", "department", "designation", "employeeId", "dateOfJoining"):
        assert required in fields
    assert {"email", "phone"} <= fields
    assert exc_info.value.code == "VALIDATION_ERROR"
    assert exc_info.value.details["errors"] == exc_info.value.errors


def test_validation_error_keeps_pydantic_cause(make_payload: Payload) -> None:
    with pytest.raises(FacultyValidationError) as exc_info:
        validate_faculty(make_payload(phone="x"))
    assert isinstance(exc_info.value.__cause__, ValidationError)


# --- 3. Pre-persistence invariants ---

def test_assert_persistable_accepts_fresh_record(make_payload: Payload) -> None:
    faculty = validate_faculty(make_payload())
    status = faculty.ratification_status.model_copy(update={"is_eligible": True})
    assert_persistable(faculty.model_copy(update={"ratification_status": status}), FIXED_NOW)


def test_assert_persistable_rejects_stale_eligibility(make_payload: Payload) -> None:
    faculty = validate_faculty(make_payload())
    with pytest.raises(FacultyValidationError) as exc_info:
        assert_persistable(faculty, FIXED_NOW)
    assert exc_info.value.errors[0]["field"] == "ratificationStatus.isEligible"


def test_assert_persistable_catches_unvalidated_mutation(make_payload: Payload) -> None:
    faculty: FacultyDomain = validate_faculty(make_payload(experience={"teaching": 1}))
    faculty.phone = "12345"
    faculty.status = "Retired"
    with pytest.raises(FacultyValidationError) as exc_info:
        assert_persistable(faculty, FIXED_NOW)
    assert {e["field"] for e in exc_info.value.errors} == {"phone", "status"}


def test_assert_persistable_rejects_non_ascii_digits(make_payload: Payload) -> None:
    faculty: FacultyDomain = validate_faculty(make_payload(experience={"teaching": 1}))
    faculty.phone = "+91-٩٨٧٦٥٤٣٢١٠"
    with pytest.raises(FacultyValidationError) as exc_info:
        assert_persistable(faculty, FIXED_NOW)
    assert [e["field"] for e in exc_info.value.errors] == ["phone"]
