import uuid
from datetime import UTC, date, datetime
from typing import Any, Optional

from sqlalchemy import JSON, CheckConstraint, Column
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return str(uuid.uuid4())


class FacultyRecord(SQLModel, table=True):
    """Persisted faculty document.

    Queryable sub-fields (experience, publications, ratification status) are
    flattened into columns; the rest of the nested data lives in JSON columns.
    """
    __tablename__ = "faculty"
    __table_args__ = (
        CheckConstraint("experience_teaching >= 0", name="ck_faculty_teaching_non_negative"),
        CheckConstraint("experience_industry >= 0", name="ck_faculty_industry_non_negative"),
        CheckConstraint("experience_research >= 0", name="ck_faculty_research_non_negative"),
        CheckConstraint("publications_journals >= 0", name="ck_faculty_journals_non_negative"),
        CheckConstraint("publications_conferences >= 0", name="ck_faculty_conferences_non_negative"),
        CheckConstraint("publications_books >= 0", name="ck_faculty_books_non_negative"),
    )

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=36)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(unique=True, index=True)
    employee_id: str = Field(unique=True, index=True)
    department: str = Field(index=True)
    designation: str = Field(index=True)
    date_of_joining: date
    qualifications: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Experience (years)
    experience_teaching: int = 0
    experience_industry: int = 0
    experience_research: int = 0

    # Publication counts
    publications_journals: int = 0
    publications_conferences: int = 0
    publications_books: int = 0

    phone: str
    address: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    # Ratification status
    is_ratified: bool = Field(default=False, index=True)
    ratification_date: Optional[datetime] = None
    ratified_by: Optional[str] = None
    ratification_comments: Optional[str] = None
    is_eligible: bool = False

    status: str = Field(default="Active", index=True)
    documents: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # System timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
