import logging

from sqlmodel import Session, col, func, select

# Layer 4: Data Access
from app.data_access.database import storage_guard
from app.data_access.models import FacultyRecord

# Layer 3: Domain Entities
from app.domain.faculty import Designation, FacultyStatus
from app.domain.stats import DepartmentCount, FacultyOverview


logger = logging.getLogger(__name__)

class StatsService:
    """Read-only dashboard aggregates over the faculty table.

    Only counts leave this service; no per-record detail is exposed.
    """

    def __init__(self, session: Session) -> None:
        """Initializes the service with a database session.

        Args:
            session (Session): The active SQLModel/SQLAlchemy session.
        """
        self.session = session

    def count_all(self) -> int:
        """Total number of stored records, regardless of status."""
        with storage_guard(self.session, "faculty count"):
            return self.session.exec(select(func.count()).select_from(FacultyRecord)).one()

    # --- 1. get_overview ---
    def get_overview(self) -> FacultyOverview:
        """Active totals, ratified totals and per-designation counts.

        Returns:
            FacultyOverview: Counts; designations without members report 0.
        """
        active = col(FacultyRecord.status) == FacultyStatus.ACTIVE.value

        with storage_guard(self.session, "overview statistics"):
            # 1. Headline counts
            total = self.session.exec(
                select(func.count()).select_from(FacultyRecord).where(active)
            ).one()
            ratified = self.session.exec(
                select(func.count()).select_from(FacultyRecord).where(active, col(FacultyRecord.is_ratified))
            ).one()

            # 2. Group by designation
            rows = self.session.exec(
                select(FacultyRecord.designation, func.count())
                .where(active)
                .group_by(FacultyRecord.designation)
            ).all()

        by_designation = {designation: count for designation, count in rows}
        return FacultyOverview(
            total_faculty=total,
            professors=by_designation.get(Designation.PROFESSOR.value, 0),
            associate_professors=by_designation.get(Designation.ASSOCIATE_PROFESSOR.value, 0),
            assistant_professors=by_designation.get(Designation.ASSISTANT_PROFESSOR.value, 0),
            ratified_faculty=ratified
        )

    # --- 2. get_department_distribution ---
    def get_department_distribution(self) -> list[DepartmentCount]:
        """Active faculty per department, largest first, for chart rendering."""
        count = func.count().label("count")
        statement = (
            select(FacultyRecord.department, count)
            .where(col(FacultyRecord.status) == FacultyStatus.ACTIVE.value)
            .group_by(FacultyRecord.department)
            .order_by(count.desc(), col(FacultyRecord.department))
        )
        with storage_guard(self.session, "department distribution"):
            rows = self.session.exec(statement).all()

        return [DepartmentCount(department=department, count=n) for department, n in rows]
