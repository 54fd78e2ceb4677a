"""
Main entrypoint for the Pet Clinic customers API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn petclinic_customers.app.main:app --reload

Error mapping
-------------
* ``NotFoundError`` → 404
* ``BusinessRuleError`` → 400
* ``DuplicateError`` → 409
* request validation failures → 400 with one message per field
* anything else → 500
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.db import init_db
from .core.exceptions import BusinessRuleError, DuplicateError, NotFoundError, PetClinicError
from .core.logging_config import setup_logging
from .core.sample_data import seed_sample_data
from .api.v1.router import router as v1_router
from .schemas.error import ErrorResponse


logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    BusinessRuleError: status.HTTP_400_BAD_REQUEST,
    DuplicateError: status.HTTP_409_CONFLICT,
}


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_service_error(request: Request, exc: PetClinicError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return _error_response(status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append(f"{location}: {error['msg']}")
    return _error_response(status.HTTP_400_BAD_REQUEST, "validation failed", errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"internal server error: {exc}")


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers the error handlers and includes the
    versioned API routers.  On startup the database migrations are
    applied and, when enabled, the sample data is seeded.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        description="Owners, pets and pet types of the pet clinic.",
    )

    app.add_exception_handler(PetClinicError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if it does not exist and brings the
        # schema up to date.
        init_db()
        if settings.seed_sample_data:
            seed_sample_data()

    return app


# Create the application instance at import time so that ASGI servers
# can locate it as ``petclinic_customers.app.main:app``.
app = create_app()
