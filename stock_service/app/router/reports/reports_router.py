from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.reports import reports_crud
from ...schemas.overview.analytics_schema import ReportRequest

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.post("/generate")
def generate_report(
    request: Optional[ReportRequest] = None,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return reports_crud.generate_report(db, request or ReportRequest())
