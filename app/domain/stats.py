from pydantic import Field

from .faculty import CamelModel


class FacultyOverview(CamelModel):
    """Dashboard counts over Active faculty.

    Designations with no members report 0.
    """
    total_faculty: int = Field(0, ge=0)
    professors: int = Field(0, ge=0)
    associate_professors: int = Field(0, ge=0)
    assistant_professors: int = Field(0, ge=0)
    ratified_faculty: int = Field(0, ge=0)


class DepartmentCount(CamelModel):
    """One bar of the department distribution chart."""
    department: str
    count: int = Field(..., ge=0)
