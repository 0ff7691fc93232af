"""Domain errors and their HTTP mapping.

Services raise these typed errors; the app factory installs handlers
that turn them into JSON responses, so routers stay free of try/except.

- NotFoundError    → 404 {"detail": "Product with id ... not found"}
- ConflictError    → 409 {"detail": ...}
- BadRequestError  → 400 {"detail": ...}
- request validation → 400 {"<field>": "<message>", ...}
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class TiendaError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TiendaError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(TiendaError):
    status_code = 409


class BadRequestError(TiendaError):
    status_code = 400


def validation_errors_by_field(exc: RequestValidationError) -> dict[str, str]:
    """Flatten pydantic errors into {field: message}, first message wins."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


async def _tienda_error_handler(request: Request, exc: TiendaError) -> JSONResponse:
    logger.info(
        "request.rejected",
        path=request.url.path,
        status=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content=validation_errors_by_field(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TiendaError, _tienda_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
