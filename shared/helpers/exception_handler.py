import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.schemas import FieldError, JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

# Request sections that carry no meaning for the client
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def field_errors_from_validation(exc):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())
               if part not in _LOCATION_PREFIXES]
        errors.append(FieldError(
            field=".".join(loc) or "body",
            message=err.get("msg", "Invalid value")
        ))
    return errors


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already packs a JsonOutResult into detail
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail.keys()):
            wrapped = exc.detail
        else:
            wrapped = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
                message=str(exc.detail)
            ).model_dump()
        return JSONResponse(
            content=wrapped,
            status_code=exc.status_code or 400,
            headers=getattr(exc, "headers", None)
        )

    # query models built through Depends() raise a plain ValidationError
    @app.exception_handler(ValidationError)
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc):
        errors = field_errors_from_validation(exc)
        wrapped = JsonOutResult(
            data=[e.model_dump() for e in errors],
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message="Validation failed"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=status.HTTP_400_BAD_REQUEST)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INTERNAL_SERVER_ERROR,
            message=str(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
