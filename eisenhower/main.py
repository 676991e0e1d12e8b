"""eisenhower - personal Eisenhower Matrix task organizer."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from eisenhower.core.config import settings
from eisenhower.core.db_client import init_db
from eisenhower.core.errors import TaskError, classify_error_with_response
from eisenhower.core.logging import configure_logfire, instrument_fastapi
from eisenhower.interface.auth import require_basic_auth
from eisenhower.interface.board_router import router as board_router


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Warn loudly when the shipped default credentials are still in use."""
    if settings.uses_default_credentials():
        logger.warning(
            "startup_validation",
            extra={"stage": "credentials", "status": "default_credentials_in_use"},
        )
    else:
        logger.info("startup_validation", extra={"stage": "credentials", "status": "ok"})


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so validation logs are captured
    configure_logfire()
    validate_startup_configuration()

    await init_db()
    yield


app = FastAPI(
    title="eisenhower",
    description="Personal task organizer based on the Eisenhower Matrix",
    version="0.1.0",
    lifespan=lifespan,
    dependencies=[Depends(require_basic_auth)],
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(board_router)


def _error_response(request: Request, exc: Exception) -> JSONResponse:
    error = classify_error_with_response(exc)
    level = logging.ERROR if error.status_code >= 500 else logging.INFO  # noqa: PLR2004
    logger.log(
        level,
        "request_failed",
        extra={"path": request.url.path, "code": error.code, "error": str(exc)},
    )
    return JSONResponse(
        content={"code": error.code, "message": error.message},
        status_code=error.status_code,
    )


@app.exception_handler(TaskError)
async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    """Translate task failures into a status code and a JSON error body."""
    return _error_response(request, exc)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report anything unclassified as a generic server error."""
    return _error_response(request, exc)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
