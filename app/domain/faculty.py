import re
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)
PHONE_PATTERN = re.compile(r"^\+91-\d{10}$", re.ASCII)
ALL = "all"


class Department(str, Enum):
    COMPUTER_SCIENCE = "Computer Science Engineering"
    ELECTRONICS_COMMUNICATION = "Electronics and Communication Engineering"
    ELECTRICAL = "Electrical Engineering"
    MECHANICAL = "Mechanical Engineering"
    CIVIL = "Civil Engineering"
    CHEMICAL = "Chemical Engineering"
    INFORMATION_TECHNOLOGY = "Information Technology"
    ELECTRONICS_INSTRUMENTATION = "Electronics and Instrumentation Engineering"


class Designation(str, Enum):
    PROFESSOR = "Professor"
    ASSOCIATE_PROFESSOR = "Associate Professor"
    ASSISTANT_PROFESSOR = "Assistant Professor"


class FacultyStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class CamelModel(BaseModel):
    """Base config: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class Experience(CamelModel):
    """Years of experience by category."""
    teaching: int = Field(..., ge=0, description="Years of teaching experience")
    industry: int = Field(0, ge=0)
    research: int = Field(0, ge=0)


class Publications(CamelModel):
    journals: int = Field(0, ge=0)
    conferences: int = Field(0, ge=0)
    books: int = Field(0, ge=0)

    def total(self) -> int:
        return self.journals + self.conferences + self.books


class Address(CamelModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None


class RatificationStatus(CamelModel):
    """Ratification outcome plus the cached eligibility verdict.

    `is_eligible` is a cache of the eligibility rule; it is recomputed
    before every write and is never the source of truth.
    """
    is_ratified: bool = False
    ratification_date: datetime | None = None
    ratified_by: str | None = None
    comments: str | None = None
    is_eligible: bool = False


class FacultyDocument(CamelModel):
    name: str | None = None
    path: str | None = None
    upload_date: datetime | None = Field(None, description="Stamped on save when missing")


def full_name(faculty: Any) -> str:
    """Derived display name: first + " " + last."""
    return f"{faculty.first_name} {faculty.last_name}"


class FacultySummary(CamelModel):
    """The domain representation of a faculty member without attachments.

    This is the shape returned by directory listings; `FacultyDomain` adds
    the uploaded documents on top of it.

    Attributes:
        id (str): System-generated UUID, None until persisted.
        email (str): Unique, lowercase-normalized contact address.
        employee_id (str): Unique, trimmed and upper-cased staff number.
        designation (Designation): Rank that selects the ratification thresholds.
        ratification_status (RatificationStatus): Ratification outcome and cached eligibility.
    """
    # 1. Database Identity
    id: str | None = None

    # 2. Core Data
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: str
    employee_id: str = Field(..., min_length=1)
    department: Department
    designation: Designation
    date_of_joining: date
    qualifications: list[str] = Field(..., min_length=1)
    experience: Experience
    publications: Publications = Field(default_factory=Publications)
    phone: str
    address: Address | None = None
    ratification_status: RatificationStatus = Field(default_factory=RatificationStatus)
    status: FacultyStatus = FacultyStatus.ACTIVE.value

    # 3. System Metadata
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator('first_name', 'last_name', mode='before')
    @classmethod
    def strip_names(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator('employee_id', mode='before')
    @classmethod
    def normalize_employee_id(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('qualifications')
    @classmethod
    def clean_qualifications(cls, v: list[str]) -> list[str]:
        """Keeps order and exact values; rejects blank entries."""
        if any(not q.strip() for q in v):
            raise ValueError("Qualifications cannot contain blank entries")
        return v

    @field_validator('phone', mode='before')
    @classmethod
    def strip_phone(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone_format(cls, v: str) -> str:
        if not PHONE_PATTERN.fullmatch(v):
            raise ValueError("Phone number must be in format: +91-xxxxxxxxxx")
        return v

    @computed_field(alias="fullName")
    @property
    def full_name(self) -> str:
        return full_name(self)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "firstName": "John",
                "lastName": "Doe",
                "email": "john.doe@jntuk.edu.in",
                "employeeId": "JNTUK001",
                "department": "Computer Science Engineering",
                "designation": "Professor",
                "dateOfJoining": "2020-01-15",
                "qualifications": ["Ph.D", "M.Tech"],
                "experience": {"teaching": 10, "industry": 5, "research": 8},
                "publications": {"journals": 15, "conferences": 20, "books": 2},
                "phone": "+91-9876543210",
                "status": "Active"
            }
        }
    )


class FacultyDomain(FacultySummary):
    """The full faculty record, including uploaded documents."""
    documents: list[FacultyDocument] = Field(default_factory=list)


class RatificationRequest(CamelModel):
    ratified_by: str | None = None
    comments: str | None = None


class FacultyFilter(BaseModel):
    """Directory listing options. `all` disables the department/designation filters."""
    department: str = ALL
    designation: str = ALL
    status: str = FacultyStatus.ACTIVE.value
    ratified: bool | None = None
    search: str | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)


class Pagination(BaseModel):
    current: int
    pages: int
    total: int
    limit: int


class FacultyPage(BaseModel):
    data: list[FacultySummary]
    pagination: Pagination
