from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.overview import analytics_crud, analytics_export_crud
from ...enum.report_enum import ExportFormat
from ...schemas.overview.analytics_schema import AnalyticsExportRequest

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("")
def get_analytics(
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF))
):
    return analytics_crud.get_dashboard()


# Same export on both verbs so plain download links work
@router.get("/export")
def export_analytics_link(
    format: ExportFormat = ExportFormat.csv,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return analytics_export_crud.export_analytics(db, format)


@router.post("/export")
def export_analytics(
    request: Optional[AnalyticsExportRequest] = None,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return analytics_export_crud.export_analytics(
        db, request.format if request else ExportFormat.csv)
