from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from app.core.exceptions import StorageUnavailableError
from app.services.faculty_service import FacultyService
from app.services.stats_service import StatsService

Payload = Callable[..., dict[str, Any]]


def test_overview_on_empty_directory(session: Session) -> None:
    overview = StatsService(session).get_overview()

    assert overview.total_faculty == 0
    assert overview.professors == 0
    assert overview.associate_professors == 0
    assert overview.assistant_professors == 0
    assert overview.ratified_faculty == 0


def test_overview_counts_active_faculty(session: Session, service: FacultyService, make_payload: Payload) -> None:
    professor = {"designation": "Professor", "experience": {"teaching": 8}, "publications": {"journals": 15}}
    ratified = service.create_faculty(make_payload(**professor))
    service.create_faculty(make_payload(**professor))
    service.create_faculty(make_payload())
    service.create_faculty(make_payload(designation="Associate Professor", status="Inactive"))
    service.ratify_faculty(ratified.id, ratified_by="Registrar")

    overview = StatsService(session).get_overview()

    assert overview.total_faculty == 3
    assert overview.professors == 2
    assert overview.associate_professors == 0
    assert overview.assistant_professors == 1
    assert overview.ratified_faculty == 1


def test_overview_serializes_with_camel_case(session: Session) -> None:
    dumped = StatsService(session).get_overview().model_dump(by_alias=True)
    assert set(dumped) == {
        "totalFaculty", "professors", "associateProfessors", "assistantProfessors", "ratifiedFaculty"
    }


def test_department_distribution(session: Session, service: FacultyService, make_payload: Payload) -> None:
    for department in ("Civil Engineering", "Civil Engineering", "Information Technology", "Chemical Engineering"):
        service.create_faculty(make_payload(department=department))
    service.create_faculty(make_payload(department="Mechanical Engineering", status="On Leave"))

    distribution = StatsService(session).get_department_distribution()

    assert [(d.department, d.count) for d in distribution] == [
        ("Civil Engineering", 2),
        ("Chemical Engineering", 1),
        ("Information Technology", 1),
    ]


def test_count_all_includes_every_status(session: Session, service: FacultyService, make_payload: Payload) -> None:
    service.create_faculty(make_payload())
    service.create_faculty(make_payload(status="Inactive"))
    assert StatsService(session).count_all() == 2


def test_storage_failure_is_reported_as_unavailable() -> None:
    session = MagicMock(spec=Session)
    session.exec.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    with pytest.raises(StorageUnavailableError):
        StatsService(session).get_overview()
    with pytest.raises(StorageUnavailableError):
        StatsService(session).get_department_distribution()
