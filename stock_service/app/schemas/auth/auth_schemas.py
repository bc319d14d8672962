from uuid import UUID
from pydantic import BaseModel, EmailStr, field_validator

from shared.core.schemas import CamelModel
from shared.utils.enums import UserRole


class LoginRequest(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return value.lower() if isinstance(value, str) else value


class AuthUser(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: AuthUser
