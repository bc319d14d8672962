from fastapi import HTTPException, status
from typing import Any, Optional

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400, data: Optional[Any] = None):
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=data,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )


def not_found_response(message: str):
    return error_response(
        message=message,
        status_code=AppStatusCode.NOT_FOUND,
        http_status=status.HTTP_404_NOT_FOUND
    )


def conflict_response(message: str):
    return error_response(
        message=message,
        status_code=AppStatusCode.DUPLICATE_ENTRY,
        http_status=status.HTTP_409_CONFLICT
    )


def forbidden_response(message: str):
    return error_response(
        message=message,
        status_code=AppStatusCode.ACCESS_FORBIDDEN,
        http_status=status.HTTP_403_FORBIDDEN
    )
