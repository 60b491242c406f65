"""Ratification eligibility rule.

A faculty member qualifies when every minimum of their designation's tier
is met: years of service, years of teaching experience and total
publications (journals + conferences + books). There is no partial credit.
"""

from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict

from .faculty import Designation


SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


class EligibilityThreshold(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_years_of_service: int
    min_teaching_years: int
    min_publications: int


RATIFICATION_THRESHOLDS: dict[str, EligibilityThreshold] = {
    Designation.ASSISTANT_PROFESSOR.value: EligibilityThreshold(
        min_years_of_service=3, min_teaching_years=3, min_publications=5
    ),
    Designation.ASSOCIATE_PROFESSOR.value: EligibilityThreshold(
        min_years_of_service=2, min_teaching_years=5, min_publications=10
    ),
    Designation.PROFESSOR.value: EligibilityThreshold(
        min_years_of_service=1, min_teaching_years=8, min_publications=15
    ),
}


def _as_utc(moment: date) -> datetime:
    if isinstance(moment, datetime):
        return moment if moment.tzinfo else moment.replace(tzinfo=UTC)
    return datetime.combine(moment, time.min, tzinfo=UTC)


def _count(value: Any) -> int:
    """Missing or non-numeric counters count as zero."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return max(int(value), 0)


def years_of_service(date_of_joining: date, now: datetime | None = None) -> float:
    """Elapsed service in 365.25-day years.

    A future joining date yields 0.0 rather than a negative duration.
    """
    now = _as_utc(now or datetime.now(UTC))
    elapsed = (now - _as_utc(date_of_joining)).total_seconds() / SECONDS_PER_YEAR
    return max(elapsed, 0.0)


def is_eligible(
    designation: Any,
    date_of_joining: date | None,
    teaching_years: Any,
    total_publications: Any,
    now: datetime | None = None,
) -> bool:
    """Applies the tier for `designation`; unknown designations never qualify."""
    threshold = RATIFICATION_THRESHOLDS.get(getattr(designation, "value", designation))
    if threshold is None or not isinstance(date_of_joining, date):
        return False

    return (
        years_of_service(date_of_joining, now) >= threshold.min_years_of_service
        and _count(teaching_years) >= threshold.min_teaching_years
        and _count(total_publications) >= threshold.min_publications
    )


def evaluate_eligibility(faculty: Any, now: datetime | None = None) -> bool:
    """Computes the eligibility verdict for a faculty record.

    Pure: the record is not modified; callers store the result. Accepts a
    `FacultyDomain` or any object exposing the same attributes, and degrades
    to False when data is missing instead of raising.

    Args:
        faculty: The record to evaluate.
        now (datetime): Reference instant; defaults to the current UTC time.

    Returns:
        bool: True when every threshold of the designation's tier is met.
    """
    experience = getattr(faculty, "experience", None)
    publications = getattr(faculty, "publications", None)
    total_publications = sum(
        _count(getattr(publications, kind, 0)) for kind in ("journals", "conferences", "books")
    )

    return is_eligible(
        designation=getattr(faculty, "designation", None),
        date_of_joining=getattr(faculty, "date_of_joining", None),
        teaching_years=getattr(experience, "teaching", 0),
        total_publications=total_publications,
        now=now,
    )
