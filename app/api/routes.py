from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import StorageUnavailableError

# Layer 4: Data Access (Session)
from app.data_access.database import get_session

# Layer 3: Domain Entities (Pydantic models)
from app.domain import (
    DepartmentCount,
    FacultyDomain,
    FacultyFilter,
    FacultyOverview,
    FacultyPage,
    RatificationRequest,
)

# Layer 2: Services
from app.services.faculty_service import FacultyService
from app.services.seed_service import SeedService
from app.services.stats_service import StatsService


router = APIRouter(prefix="/api")

FacultyPayload = Annotated[dict[str, Any], Body(description="Faculty fields, camelCase or snake_case")]


# --- FACULTY DIRECTORY ---
@router.get("/faculty", tags=["Faculty"])
def list_faculty(
    session: Annotated[Session, Depends(get_session)],
    department: Annotated[str, Query(description="Exact department, or 'all'")] = "all",
    designation: Annotated[str, Query(description="Exact designation, or 'all'")] = "all",
    faculty_status: Annotated[str, Query(alias="status")] = "Active",
    ratified: bool | None = None,
    search: Annotated[str | None, Query(description="Matches name, employee ID or email")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = settings.DEFAULT_PAGE_SIZE
) -> FacultyPage:
    """Filtered, searchable and paginated faculty listing, newest first."""
    filters = FacultyFilter(
        department=department,
        designation=designation,
        status=faculty_status,
        ratified=ratified,
        search=search,
        page=page,
        limit=limit
    )
    service = FacultyService(session)
    return service.list_faculty(filters)

@router.get("/faculty/{faculty_id}", tags=["Faculty"])
def get_faculty(
    faculty_id: str,
    session: Annotated[Session, Depends(get_session)]
) -> FacultyDomain:
    """Retrieves a single faculty record by ID."""
    service = FacultyService(session)
    return service.get_faculty(faculty_id)

@router.post("/faculty", tags=["Faculty"], status_code=status.HTTP_201_CREATED)
def create_faculty(
    data: FacultyPayload,
    session: Annotated[Session, Depends(get_session)]
) -> FacultyDomain:
    """Creates a faculty record; eligibility is computed before it is saved."""
    service = FacultyService(session)
    return service.create_faculty(data)

@router.put("/faculty/{faculty_id}", tags=["Faculty"])
def update_faculty(
    faculty_id: str,
    data: FacultyPayload,
    session: Annotated[Session, Depends(get_session)]
) -> FacultyDomain:
    """Updates a faculty record and recomputes its eligibility."""
    service = FacultyService(session)
    return service.update_faculty(faculty_id, data)

@router.delete("/faculty/{faculty_id}", tags=["Faculty"], status_code=status.HTTP_204_NO_CONTENT)
def delete_faculty(
    faculty_id: str,
    session: Annotated[Session, Depends(get_session)]
) -> None:
    """Removes a faculty record."""
    service = FacultyService(session)
    service.delete_faculty(faculty_id)
    return None


# --- RATIFICATION ---
@router.get("/ratification/eligible", tags=["Ratification"])
def list_eligible_faculty(
    session: Annotated[Session, Depends(get_session)]
) -> list[FacultyDomain]:
    """Active, unratified faculty who currently meet their tier's thresholds."""
    service = FacultyService(session)
    return service.list_eligible_faculty()

@router.post("/ratification/ratify/{faculty_id}", tags=["Ratification"])
def ratify_faculty(
    faculty_id: str,
    session: Annotated[Session, Depends(get_session)],
    data: RatificationRequest | None = None
) -> FacultyDomain:
    """Ratifies a faculty member after re-checking eligibility; the body is optional."""
    data = data or RatificationRequest()
    service = FacultyService(session)
    return service.ratify_faculty(faculty_id, ratified_by=data.ratified_by, comments=data.comments)


# --- STATISTICS ---
@router.get("/stats/overview", tags=["Statistics"])
def get_overview(
    session: Annotated[Session, Depends(get_session)]
) -> FacultyOverview:
    """Active totals, ratified totals and per-designation counts."""
    service = StatsService(session)
    return service.get_overview()

@router.get("/stats/departments", tags=["Statistics"])
def get_department_distribution(
    session: Annotated[Session, Depends(get_session)]
) -> list[DepartmentCount]:
    """Active faculty per department as chart data."""
    service = StatsService(session)
    return service.get_department_distribution()


# --- ADMIN & HEALTH ---
@router.get("/health", tags=["Admin"])
def health_check(
    session: Annotated[Session, Depends(get_session)]
) -> dict[str, Any]:
    """Reports server state, store reachability and the number of records."""
    service = StatsService(session)
    try:
        total = service.count_all()
        database = "connected"
    except StorageUnavailableError:
        total = 0
        database = "unavailable"

    return {
        "server": "running",
        "database": database,
        "timestamp": datetime.now(UTC).isoformat(),
        "totalFaculty": total
    }

@router.post("/seed", tags=["Admin"])
def seed_database(
    session: Annotated[Session, Depends(get_session)],
    force: bool = False
) -> dict[str, Any]:
    """Loads the configured sample file when the directory is empty (or when forced)."""
    service = SeedService(session)
    return service.run_seed_process(force=force)
