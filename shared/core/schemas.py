import math
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union
from uuid import UUID

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class CamelModel(EmptyStringModel):
    """Snake_case attributes, camelCase on the wire (both accepted on input)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserToken(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    is_active: Optional[bool] = None
    exp: Optional[int] = None


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)

    @property
    def skip(self) -> int:
        return (max(self.page, 1) - 1) * self.limit


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int

    @classmethod
    def build(cls, params: CommonQueryParams, total: int) -> "Pagination":
        return cls(
            current_page=params.page,
            total_pages=math.ceil(total / params.limit) if params.limit else 0,
            total_items=total,
        )


class Lookup(BaseModel):
    id: Union[str, UUID]  # accepts both UUID and str
    name: str

    class Config:
        from_attributes = True


def reject_null(value: Any):
    """For update DTOs whose fields may be omitted but never cleared."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value


class FieldError(BaseModel):
    field: str
    message: str


class ExportResponse(BaseModel):
    filename: str
    data: List[Dict[str, Any]]

    class Config:
        from_attributes = True


class ExportRequestParams(CommonQueryParams):
    type: str
    limit: int = Field(1000, ge=1)


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
