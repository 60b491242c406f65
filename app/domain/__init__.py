# app/domain/__init__.py

# 1. The Faculty Entity
from .faculty import (
    Address,
    Department,
    Designation,
    Experience,
    FacultyDocument,
    FacultyDomain,
    FacultyFilter,
    FacultyPage,
    FacultyStatus,
    FacultySummary,
    Pagination,
    Publications,
    RatificationRequest,
    RatificationStatus,
    full_name,
)

# 2. Business Rules
from .eligibility import RATIFICATION_THRESHOLDS, evaluate_eligibility, years_of_service

# 3. Dashboard Aggregates
from .stats import DepartmentCount, FacultyOverview


__all__ = [
    "RATIFICATION_THRESHOLDS",
    "Address",
    "Department",
    "DepartmentCount",
    "Designation",
    "Experience",
    "FacultyDocument",
    "FacultyDomain",
    "FacultyFilter",
    "FacultyOverview",
    "FacultyPage",
    "FacultyStatus",
    "FacultySummary",
    "Pagination",
    "Publications",
    "RatificationRequest",
    "RatificationStatus",
    "evaluate_eligibility",
    "full_name",
    "years_of_service"
]
