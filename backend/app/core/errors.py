# backend/app/core/errors.py
"""
Taxonomie des erreurs métier + traduction HTTP centralisée.

    ValidationFailed    → 422  {error, errors}
    RequestValidationError → 422  {error, errors}  (corps ou query mal typés)
    NotFoundError       → 404  {error}
    ConflictError       → 409  {error}   (AlreadyExistsError en hérite)
    Exception           → 500  {error, details?}   (details si DEBUG)

Les services lèvent, les routers laissent remonter : aucun try/except
dans les routers sauf cas documenté (import en masse).
"""
import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


class GestMarineError(Exception):
    """Base des erreurs métier."""

    def __init__(self, message: str, code: str = "ERROR", field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.field = field


class ValidationFailed(GestMarineError):
    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message, code="VALIDATION_ERROR")
        self.errors = errors


class NotFoundError(GestMarineError):
    def __init__(self, message: str):
        super().__init__(message, code="NOT_FOUND")


class ConflictError(GestMarineError):
    """Opération refusée par l'état courant des données."""

    def __init__(self, message: str, code: str = "CONFLICT", field: Optional[str] = None):
        super().__init__(message, code=code, field=field)


class AlreadyExistsError(ConflictError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="ALREADY_EXISTS", field=field)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        # même forme que ValidationFailed : {champ: message}
        errors = {
            str(err["loc"][-1]) if err.get("loc") else "body": err.get("msg", "")
            for err in exc.errors()
        }
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Validation failed", "code": "VALIDATION_ERROR", "errors": errors},
        )

    @app.exception_handler(ValidationFailed)
    async def _validation_handler(request: Request, exc: ValidationFailed):
        logger.info("Validation refusée %s %s : %s", request.method, request.url.path, exc.errors)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": exc.message, "code": exc.code, "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def _not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": exc.message, "code": exc.code},
        )

    @app.exception_handler(ConflictError)
    async def _conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": exc.message, "code": exc.code, "field": exc.field},
        )

    @app.exception_handler(Exception)
    async def _unhandled_handler(request: Request, exc: Exception):
        logger.exception("Erreur non gérée %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "details": str(exc) if settings.DEBUG else None,
            },
        )
