from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_db
from sqlalchemy.orm import Session

# auto_error is off so a missing header answers 401 like a bad token
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict):
    payload = data.copy()

    expires = datetime.utcnow() + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def token_for_user(user: Users) -> str:
    return create_access_token({
        "user_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
    })


def verify_token(token: str) -> Optional[UserToken]:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        return error_response(
            message="Token has expired",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    except JWTError:
        return error_response(
            message="Invalid or expired token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not payload.get("user_id") or not payload.get("role"):
        return error_response(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    return UserToken(**payload)


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None or not credentials.credentials:
        return error_response(
            message="No token, authorization denied",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    user_data = verify_token(credentials.credentials)
    try:
        user_uuid = UUID(user_data.user_id)
    except ValueError:
        return error_response(
            message="Invalid token structure",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    # Role and active flag are re-read so a demoted or deactivated user loses access at once
    user = db.query(Users).filter(Users.id == user_uuid).first()

    if not user:
        return error_response(
            message="User not found",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    user_data.role = user.role
    user_data.name = user.name
    user_data.email = user.email
    user_data.is_active = user.is_active
    return user_data


def allow_roles(*roles: str):
    """Dependency factory: only the listed roles may pass."""
    allowed = {str(getattr(r, "value", r)) for r in roles}

    def checker(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
        if current_user.role not in allowed:
            return error_response(
                message="Access denied. Insufficient permissions",
                status_code=AppStatusCode.ACCESS_FORBIDDEN,
                http_status=status.HTTP_403_FORBIDDEN
            )
        return current_user

    return checker
