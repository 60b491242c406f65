import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.api.routes import router
from app.core.config import settings
from app.core.exceptions import (
    DuplicateFieldError,
    FacultyNotFoundError,
    FacultyRegistryError,
    FacultyValidationError,
    IneligibleForRatificationError,
    InvalidIdentifierError,
    StorageUnavailableError,
)
from app.data_access.database import create_db_and_tables, engine
from app.services.seed_service import SeedService


logger = logging.getLogger(__name__)

# Transport mapping for the core's typed errors
ERROR_STATUS_CODES: dict[type[FacultyRegistryError], int] = {
    FacultyValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidIdentifierError: status.HTTP_400_BAD_REQUEST,
    IneligibleForRatificationError: status.HTTP_400_BAD_REQUEST,
    DuplicateFieldError: status.HTTP_409_CONFLICT,
    FacultyNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handles system startup and shutdown events.

    Initializes logging, creates the faculty table if it doesn't exist and
    optionally loads the sample data.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler()] # This sends it to the Terminal
    )

    create_db_and_tables()

    if settings.SEED_ON_STARTUP:
        with Session(engine) as session:
            result = SeedService(session).run_seed_process()
        logger.info(f"Startup seed: {result['message']}")

    yield

# Define the FastAPI app with metadata for Swagger UI
app = FastAPI(
    title="Faculty Ratification API",
    description="Faculty records directory with ratification eligibility tracking",
    version="1.0.0",
    lifespan=lifespan
)

# Include our routes
app.include_router(router)

@app.exception_handler(FacultyRegistryError)
async def registry_error_handler(request: Request, exc: FacultyRegistryError) -> JSONResponse:
    """Translates core errors into JSON error responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"success": False, **exc.to_dict()})

@app.get("/")
def read_root() -> dict[str, str]:
    """Landing endpoint for the API.

    Returns:
        Dict[str, str]: A welcome message.
    """
    return {"message": "Welcome to the Faculty Ratification API"}


def run() -> None:
    """Serves the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
