# app/crud/auth/auth_crud.py
import logging
from uuid import UUID
from sqlalchemy.orm import Session
from fastapi import status

from shared.core.auth import token_for_user
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from ...schemas.auth.auth_schemas import AuthUser, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


def invalid_credentials():
    return error_response(
        message="Invalid credentials",
        status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
        http_status=status.HTTP_401_UNAUTHORIZED
    )


def login(db: Session, request: LoginRequest) -> LoginResponse:
    user = db.query(Users).filter(Users.email == request.email.lower()).first()

    # unknown, inactive and wrong-password logins look the same to the caller
    if not user or not user.is_active:
        logger.info("Rejected login for %s", request.email)
        return invalid_credentials()

    if not user.verify_password(request.password):
        logger.info("Rejected login for %s: bad password", request.email)
        return invalid_credentials()

    return LoginResponse(
        token=token_for_user(user),
        user=AuthUser.model_validate(user)
    )


def get_me(db: Session, user_id: str) -> AuthUser:
    user = db.query(Users).filter(Users.id == UUID(user_id)).first()
    return AuthUser.model_validate(user)
