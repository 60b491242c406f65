import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from math import ceil
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import defer
from sqlmodel import Session, col, func, or_, select

from app.core.exceptions import (
    DuplicateFieldError,
    FacultyNotFoundError,
    IneligibleForRatificationError,
    InvalidIdentifierError,
)

# Layer 4: Data Access
from app.data_access.database import storage_guard
from app.data_access.models import FacultyRecord

# Layer 3: Domain Entities
from app.domain.eligibility import evaluate_eligibility
from app.domain.faculty import (
    ALL,
    FacultyDomain,
    FacultyFilter,
    FacultyPage,
    FacultyStatus,
    FacultySummary,
    Pagination,
    RatificationStatus,
)
from app.domain.validation import assert_persistable, validate_faculty


logger = logging.getLogger(__name__)

# (record attribute, public field name)
UNIQUE_FIELDS = (("email", "email"), ("employee_id", "employeeId"))
SYSTEM_MANAGED_KEYS = {"id", "_id", "createdAt", "updatedAt", "fullName", "ratificationStatus"}
NESTED_KEYS = {"experience", "publications", "address"}


def _camelize(key: str) -> str:
    """Maps snake_case input keys onto the camelCase wire names."""
    if "_" not in key.strip("_"):
        return key
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


class FacultyService:
    """Directory service for faculty records.

    Mediates every read and write against the faculty table: validation,
    uniqueness of email and employee ID, eligibility recomputation before
    each write, filtering, search and pagination. Store failures surface as
    StorageUnavailableError; nothing is retried.
    """

    def __init__(self, session: Session, clock: Callable[[], datetime] | None = None) -> None:
        """Initializes the service with a database session.

        Args:
            session (Session): The active SQLModel/SQLAlchemy session.
            clock (Callable): Returns the current instant; injectable for tests.
        """
        self.session = session
        self.clock = clock or (lambda: datetime.now(UTC))

    # --- Private Mapping Helpers ---

    def _to_document(self, record: FacultyRecord, include_documents: bool = True) -> dict[str, Any]:
        """Reassembles the nested document shape from the flat columns."""
        document: dict[str, Any] = {
            "id": record.id,
            "first_name": record.first_name,
            "last_name": record.last_name,
            "email": record.email,
            "employee_id": record.employee_id,
            "department": record.department,
            "designation": record.designation,
            "date_of_joining": record.date_of_joining,
            "qualifications": list(record.qualifications or []),
            "experience": {
                "teaching": record.experience_teaching,
                "industry": record.experience_industry,
                "research": record.experience_research,
            },
            "publications": {
                "journals": record.publications_journals,
                "conferences": record.publications_conferences,
                "books": record.publications_books,
            },
            "phone": record.phone,
            "address": record.address,
            "ratification_status": {
                "is_ratified": record.is_ratified,
                "ratification_date": record.ratification_date,
                "ratified_by": record.ratified_by,
                "comments": record.ratification_comments,
                "is_eligible": record.is_eligible,
            },
            "status": record.status,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }
        if include_documents:
            document["documents"] = list(record.documents or [])
        return document

    def _map_to_domain(self, record: FacultyRecord) -> FacultyDomain:
        return FacultyDomain.model_validate(self._to_document(record))

    def _map_to_summary(self, record: FacultyRecord) -> FacultySummary:
        return FacultySummary.model_validate(self._to_document(record, include_documents=False))

    def _to_record_fields(self, faculty: FacultyDomain) -> dict[str, Any]:
        """Flattens a domain entity into FacultyRecord column values."""
        ratification = faculty.ratification_status
        return {
            "first_name": faculty.first_name,
            "last_name": faculty.last_name,
            "email": faculty.email,
            "employee_id": faculty.employee_id,
            "department": faculty.department,
            "designation": faculty.designation,
            "date_of_joining": faculty.date_of_joining,
            "qualifications": list(faculty.qualifications),
            "experience_teaching": faculty.experience.teaching,
            "experience_industry": faculty.experience.industry,
            "experience_research": faculty.experience.research,
            "publications_journals": faculty.publications.journals,
            "publications_conferences": faculty.publications.conferences,
            "publications_books": faculty.publications.books,
            "phone": faculty.phone,
            "address": faculty.address.model_dump(mode="json") if faculty.address else None,
            "is_ratified": ratification.is_ratified,
            "ratification_date": ratification.ratification_date,
            "ratified_by": ratification.ratified_by,
            "ratification_comments": ratification.comments,
            "is_eligible": ratification.is_eligible,
            "status": faculty.status,
            "documents": [d.model_dump(mode="json") for d in faculty.documents],
        }

    # --- Private Business Helpers ---

    def _normalize_keys(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Camel-cases top-level keys and drops system-managed ones."""
        normalized = {}
        for key, value in payload.items():
            name = _camelize(key)
            if name not in SYSTEM_MANAGED_KEYS:
                normalized[name] = value
        return normalized

    def _merge(self, current: dict[str, Any], changes: Mapping[str, Any]) -> dict[str, Any]:
        """Applies an update payload: nested objects merge key-by-key, the rest replaces."""
        merged = dict(current)
        for key, value in self._normalize_keys(changes).items():
            if key in NESTED_KEYS and isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
                merged[key] = {**merged[key], **{_camelize(k): v for k, v in value.items()}}
            else:
                merged[key] = value
        return merged

    def _with_eligibility(self, faculty: FacultyDomain, now: datetime) -> FacultyDomain:
        """Returns a copy carrying a freshly computed eligibility verdict."""
        status = faculty.ratification_status.model_copy(
            update={"is_eligible": evaluate_eligibility(faculty, now)}
        )
        return faculty.model_copy(update={"ratification_status": status})

    def _with_upload_dates(self, faculty: FacultyDomain, now: datetime) -> FacultyDomain:
        """Stamps documents that arrive without an upload date with the save time."""
        documents = [
            d if d.upload_date is not None else d.model_copy(update={"upload_date": now})
            for d in faculty.documents
        ]
        return faculty.model_copy(update={"documents": documents})

    def _parse_id(self, faculty_id: Any) -> str:
        """Returns the canonical UUID string or raises InvalidIdentifierError."""
        try:
            return str(uuid.UUID(str(faculty_id)))
        except ValueError as e:
            raise InvalidIdentifierError(faculty_id) from e

    def _get_record_or_404(self, faculty_id: Any) -> FacultyRecord:
        """Internal helper to retrieve a record or raise FacultyNotFoundError.

        Raises:
            InvalidIdentifierError: If the ID is not a structurally valid UUID.
            FacultyNotFoundError: If no record has this ID.
        """
        record_id = self._parse_id(faculty_id)
        with storage_guard(self.session, "faculty lookup"):
            record = self.session.get(FacultyRecord, record_id)
        if record is None:
            raise FacultyNotFoundError(str(faculty_id))
        return record

    def _ensure_unique(self, faculty: FacultyDomain, exclude_id: str | None = None) -> None:
        """Raises DuplicateFieldError if email or employee ID belongs to another record."""
        for attr, field in UNIQUE_FIELDS:
            value = getattr(faculty, attr)
            statement = select(FacultyRecord.id).where(getattr(FacultyRecord, attr) == value)
            if exclude_id is not None:
                statement = statement.where(FacultyRecord.id != exclude_id)
            if self.session.exec(statement).first():
                raise DuplicateFieldError(field, value)

    def _persist(self, record: FacultyRecord, faculty: FacultyDomain, exclude_id: str | None = None) -> None:
        """Commits the record; a unique-index race is reported as a conflict."""
        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # Another writer won the race on email/employeeId
            self._ensure_unique(faculty, exclude_id)
            raise
        self.session.refresh(record)

    # --- 1. list_faculty ---
    def list_faculty(self, filters: FacultyFilter | None = None) -> FacultyPage:
        """Retrieves a page of faculty, newest first.

        Args:
            filters (FacultyFilter): Department/designation (or `all`), status,
                ratified flag, free-text search and 1-based page/limit.

        Returns:
            FacultyPage: The page of summaries (documents excluded) and pagination totals.
        """
        filters = filters or FacultyFilter()

        # 1. Build filter conditions
        conditions = [col(FacultyRecord.status) == filters.status]
        if filters.department and filters.department != ALL:
            conditions.append(col(FacultyRecord.department) == filters.department)
        if filters.designation and filters.designation != ALL:
            conditions.append(col(FacultyRecord.designation) == filters.designation)
        if filters.ratified is not None:
            conditions.append(col(FacultyRecord.is_ratified) == filters.ratified)

        search = (filters.search or "").strip()
        if search:
            conditions.append(or_(
                col(FacultyRecord.first_name).icontains(search, autoescape=True),
                col(FacultyRecord.last_name).icontains(search, autoescape=True),
                col(FacultyRecord.employee_id).icontains(search, autoescape=True),
                col(FacultyRecord.email).icontains(search, autoescape=True),
            ))

        # 2. Count and fetch the requested page
        with storage_guard(self.session, "faculty listing"):
            count_statement = select(func.count()).select_from(FacultyRecord).where(*conditions)
            total = self.session.exec(count_statement).one()

            statement = (
                select(FacultyRecord)
                .where(*conditions)
                .options(defer(FacultyRecord.documents))
                .order_by(col(FacultyRecord.created_at).desc())
                .offset((filters.page - 1) * filters.limit)
                .limit(filters.limit)
            )
            records = self.session.exec(statement).all()
            data = [self._map_to_summary(r) for r in records]

        return FacultyPage(
            data=data,
            pagination=Pagination(
                current=filters.page,
                pages=ceil(total / filters.limit),
                total=total,
                limit=filters.limit
            )
        )

    # --- 2. get_faculty ---
    def get_faculty(self, faculty_id: Any) -> FacultyDomain:
        """Retrieves a single faculty record by ID."""
        return self._map_to_domain(self._get_record_or_404(faculty_id))

    # --- 3. create_faculty ---
    def create_faculty(self, payload: Mapping[str, Any]) -> FacultyDomain:
        """Validates, scores eligibility and persists a new faculty record.

        Args:
            payload (Mapping): Raw input, camelCase or snake_case keys.

        Returns:
            FacultyDomain: The stored record.

        Raises:
            FacultyValidationError: Listing every violated constraint.
            DuplicateFieldError: If email or employeeId is already in use.
        """
        # 1. Field validation and normalization
        faculty = validate_faculty(self._normalize_keys(payload))

        # 2. Eligibility is evaluated once before first persistence
        now = self.clock()
        faculty = self._with_eligibility(faculty, now)
        faculty = self._with_upload_dates(faculty, now)
        assert_persistable(faculty, now)

        # 3. Uniqueness check and insert
        with storage_guard(self.session, "faculty creation"):
            self._ensure_unique(faculty)
            record = FacultyRecord(**self._to_record_fields(faculty), created_at=now, updated_at=now)
            self._persist(record, faculty)
            created = self._map_to_domain(record)

        logger.info(f"Faculty {created.id} ({created.employee_id}) created successfully.")
        return created

    # --- 4. update_faculty ---
    def update_faculty(self, faculty_id: Any, changes: Mapping[str, Any]) -> FacultyDomain:
        """Applies a partial or full update and recomputes eligibility.

        Args:
            faculty_id: The record ID.
            changes (Mapping): Fields to change; nested objects merge key-by-key.

        Returns:
            FacultyDomain: The updated record.
        """
        # 1. Fetch existing record and merge changes over it
        record = self._get_record_or_404(faculty_id)
        current = self._map_to_domain(record).model_dump(by_alias=True, exclude={"full_name"})
        faculty = validate_faculty(self._merge(current, changes))

        # 2. Eligibility follows the updated fields
        now = self.clock()
        faculty = self._with_eligibility(faculty, now)
        faculty = self._with_upload_dates(faculty, now)
        assert_persistable(faculty, now)

        # 3. Uniqueness against other records, then persist
        with storage_guard(self.session, "faculty update"):
            self._ensure_unique(faculty, exclude_id=record.id)
            record.sqlmodel_update(self._to_record_fields(faculty))
            record.updated_at = now
            self._persist(record, faculty, exclude_id=record.id)
            updated = self._map_to_domain(record)

        logger.info(f"Faculty {record.id} updated successfully.")
        return updated

    # --- 5. delete_faculty ---
    def delete_faculty(self, faculty_id: Any) -> None:
        """Removes the record. A second delete reports FacultyNotFoundError."""
        record = self._get_record_or_404(faculty_id)
        with storage_guard(self.session, "faculty deletion"):
            self.session.delete(record)
            self.session.commit()
        logger.info(f"Faculty {faculty_id} deleted.")

    # --- 6. list_eligible_faculty ---
    def list_eligible_faculty(self) -> list[FacultyDomain]:
        """Active, not-yet-ratified faculty who qualify right now.

        Eligibility is recomputed here rather than read from storage, since
        years of service grow continuously.
        """
        now = self.clock()
        statement = (
            select(FacultyRecord)
            .where(
                col(FacultyRecord.status) == FacultyStatus.ACTIVE.value,
                col(FacultyRecord.is_ratified).is_(False),
            )
            .order_by(col(FacultyRecord.created_at).desc())
        )
        with storage_guard(self.session, "eligible faculty listing"):
            candidates = [self._map_to_domain(r) for r in self.session.exec(statement).all()]

        eligible = []
        for faculty in candidates:
            refreshed = self._with_eligibility(faculty, now)
            if refreshed.ratification_status.is_eligible:
                eligible.append(refreshed)
        return eligible

    # --- 7. ratify_faculty ---
    def ratify_faculty(
        self,
        faculty_id: Any,
        ratified_by: str | None = None,
        comments: str | None = None,
    ) -> FacultyDomain:
        """Marks an eligible faculty member as ratified.

        Raises:
            IneligibleForRatificationError: If the record does not qualify now;
                nothing is written in that case.
        """
        # 1. Re-check eligibility at the moment of ratification
        record = self._get_record_or_404(faculty_id)
        faculty = self._map_to_domain(record)
        now = self.clock()
        if not evaluate_eligibility(faculty, now):
            raise IneligibleForRatificationError(record.id)

        # 2. Stamp the ratification
        ratified = faculty.model_copy(update={
            "ratification_status": RatificationStatus(
                is_ratified=True,
                ratification_date=now,
                ratified_by=ratified_by,
                comments=comments,
                is_eligible=True,
            )
        })
        assert_persistable(ratified, now)

        with storage_guard(self.session, "faculty ratification"):
            record.sqlmodel_update(self._to_record_fields(ratified))
            record.updated_at = now
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
            result = self._map_to_domain(record)

        logger.info(f"Faculty {record.id} ratified by {ratified_by or 'unknown'}.")
        return result
