from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from shared.core.schemas import CamelModel, CommonQueryParams, Pagination, reject_null
from shared.utils.enums import UserRole


def _lower_email(value):
    return value.lower() if isinstance(value, str) else value


class UserBase(CamelModel):
    name: str
    email: EmailStr
    role: UserRole = UserRole.STAFF

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return _lower_email(value)


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    is_active: bool = True


class UserUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    password: Optional[str] = Field(None, min_length=6)
    is_active: Optional[bool] = None

    # password may be null: the current one is kept
    @field_validator("name", "email", "role", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return _lower_email(value)


class UserOut(CamelModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    is_active: bool
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserRequest(CommonQueryParams):
    role: Optional[UserRole] = None
    active: Optional[bool] = None


class UserListResponse(CamelModel):
    total_users: int
    users: List[UserOut]
    pagination: Pagination
