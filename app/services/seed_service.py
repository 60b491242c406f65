import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from sqlmodel import Session

# Core Config
from app.core.config import settings
from app.core.exceptions import DuplicateFieldError, FacultyValidationError

# Layer 2: ETL & Services
from app.etl.pipeline import FacultyExtractor, FacultyRowTransformer
from app.services.faculty_service import FacultyService
from app.services.stats_service import StatsService


logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path(__file__).resolve().parent.parent / "etl" / "data" / "sample_faculty.json"


class SeedService:
    """Loads sample or bulk faculty data into an empty directory.

    Every row goes through FacultyService.create_faculty, so validation,
    uniqueness and eligibility apply exactly as for a single create.
    """

    def __init__(self, session: Session, clock: Callable[[], datetime] | None = None) -> None:
        self.faculty_service = FacultyService(session, clock=clock)
        self.stats_service = StatsService(session)

    def run_seed_process(self, file_path: Path | str | None = None, force: bool = False) -> dict[str, Any]:
        """Imports faculty rows from a JSON or CSV file.

        Args:
            file_path (Path | str): Source file; defaults to SEED_FILE or the bundled sample.
            force (bool): Import even when records already exist.

        Returns:
            dict: Status, message, number created and the rows skipped with their reason.
        """
        source = Path(file_path or settings.SEED_FILE or DEFAULT_SEED_FILE)

        # 1. Only seed an empty collection unless forced
        existing = self.stats_service.count_all()
        if existing and not force:
            logger.info(f"Skipping seed: {existing} faculty records already exist.")
            return {
                "status": "skipped",
                "message": f"{existing} faculty records already exist.",
                "created": 0,
                "skipped": []
            }

        # 2. Extract and reshape rows
        logger.info(f"Loading faculty data from {source}")
        payloads = FacultyRowTransformer.to_payloads(FacultyExtractor.extract(source))

        # 3. Create each row, keeping going past bad ones
        created = 0
        skipped: list[dict[str, Any]] = []
        for row_number, payload in enumerate(payloads, start=1):
            try:
                faculty = self.faculty_service.create_faculty(payload)
            except (FacultyValidationError, DuplicateFieldError) as e:
                logger.warning(f"Skipping row {row_number}: {e.message}")
                skipped.append({"row": row_number, **e.to_dict()})
                continue
            created += 1
            logger.info(f"Created: {faculty.full_name}")

        return {
            "status": "success",
            "message": f"Seeded {created} of {len(payloads)} faculty records.",
            "created": created,
            "skipped": skipped
        }
