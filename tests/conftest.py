# 1. Standard Library
import itertools
from collections.abc import Callable, Generator
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pytest

# 2. Third-Party Libraries
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

# 3. Application Layers
from app.data_access.database import build_engine
from app.services.faculty_service import FacultyService


FIXED_NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


def years_before(years: float, now: datetime = FIXED_NOW) -> date:
    """Joining date `years` (of 365.25 days) before `now`."""
    return (now - timedelta(days=years * 365.25)).date()


# --- Setup: Isolated Testing Environment ---

@pytest.fixture(name="engine")
def engine_fixture() -> Generator[Engine, Any, None]:
    """Creates a clean, in-memory SQLite database for every test."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine: Engine) -> Generator[Session, Any, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture(name="now")
def now_fixture() -> datetime:
    return FIXED_NOW


@pytest.fixture(name="service")
def service_fixture(session: Session, now: datetime) -> FacultyService:
    return FacultyService(session, clock=lambda: now)


@pytest.fixture(name="make_payload")
def make_payload_fixture() -> Callable[..., dict[str, Any]]:
    """Factory for valid create payloads with unique email and employee ID.

    The defaults describe an Assistant Professor who meets every threshold
    at FIXED_NOW (4 years of service, 4 years teaching, 5 publications).
    """
    counter = itertools.count(1)

    def _make(**overrides: Any) -> dict[str, Any]:
        n = next(counter)
        payload: dict[str, Any] = {
            "firstName": "Asha",
            "lastName": f"Rao{n}",
            "email": f"asha.rao{n}@jntuk.edu.in",
            "employeeId": f"jntuk{n:03d}",
            "department": "Computer Science Engineering",
            "designation": "Assistant Professor",
            "dateOfJoining": years_before(4).isoformat(),
            "qualifications": ["Ph.D", "M.Tech"],
            "experience": {"teaching": 4, "industry": 1},
            "publications": {"journals": 3, "conferences": 2, "books": 0},
            "phone": "+91-9876543210",
        }
        payload.update(overrides)
        return payload

    return _make
