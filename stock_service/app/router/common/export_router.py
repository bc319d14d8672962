from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles
from shared.core.database import get_db
from shared.core.schemas import ExportRequestParams, ExportResponse, UserToken
from shared.utils.enums import UserRole
from ...crud.common import export_crud as crud

router = APIRouter(
    prefix="/api/export",
    tags=["Export"],
    dependencies=[Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))]
)


@router.get("", response_model=ExportResponse)
def get_export_data(
        params: ExportRequestParams = Depends(),
        db: Session = Depends(get_db)):
    return crud.get_export_data(db, params)
