from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode
from typing import Callable
import json
import logging

logger = logging.getLogger(__name__)

_SUCCESS_MESSAGES = {
    "GET": ("Data retrieved successfully", AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY),
    "POST": ("Created successfully", AppStatusCode.CREATED_SUCCESSFULLY),
    "PUT": ("Updated successfully", AppStatusCode.UPDATED_SUCCESSFULLY),
    "PATCH": ("Updated successfully", AppStatusCode.UPDATED_SUCCESSFULLY),
    "DELETE": ("Deleted successfully", AppStatusCode.DELETED_SUCCESSFULLY),
}


def _passthrough_headers(response):
    return {k: v for k, v in response.headers.items()
            if k.lower() not in ("content-length", "content-type")}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps plain JSON success bodies into the JsonOutResult envelope.

    Error bodies are produced already wrapped by the exception handlers,
    file downloads (csv/pdf/xlsx) are passed through untouched.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Request failed: %s %s",
                             request.method, request.url.path)
            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=AppStatusCode.INTERNAL_SERVER_ERROR,
                message=str(e),
            ).model_dump()
            return JSONResponse(content=wrapped_error, status_code=500)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return response

        # Read the full body
        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            data = None

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(
                content=data,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        if not (200 <= response.status_code < 400):
            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(response.status_code),
                message=str(data.get("detail", "")) if isinstance(data, dict) else "An unexpected error occurred",
            ).model_dump()
            return JSONResponse(
                content=wrapped_error,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        message, app_code = _SUCCESS_MESSAGES.get(
            request.method, _SUCCESS_MESSAGES["GET"])
        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=app_code,
            message=message
        ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers=_passthrough_headers(response),
        )
