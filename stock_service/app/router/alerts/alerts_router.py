from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.alerts import alerts_crud as crud
from ...schemas.alerts.alerts_schemas import AlertCreate, AlertListResponse, AlertOut, AlertRequest, AlertStats

router = APIRouter(prefix="/api/alerts",
                   tags=["alerts"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=AlertListResponse)
def get_alerts(
    params: AlertRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_alerts(db, params)


@router.get("/stats", response_model=AlertStats)
def alert_stats(db: Session = Depends(get_db)):
    return crud.get_alert_stats(db)


@router.put("/mark-all-read")
def mark_all_read(db: Session = Depends(get_db)):
    return crud.mark_all_read(db)

# ---------------- Manual alerts ----------------


@router.post("", response_model=AlertOut, status_code=status.HTTP_201_CREATED)
def create_alert(
    alert: AlertCreate,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return crud.create_alert(db, alert)


@router.patch("/{alert_id}/read", response_model=AlertOut)
def mark_read(alert_id: UUID, db: Session = Depends(get_db)):
    return crud.mark_alert_read(db, alert_id)


@router.patch("/{alert_id}/resolve", response_model=AlertOut)
def resolve_alert(
    alert_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN, UserRole.MANAGER))
):
    return crud.resolve_alert(db, alert_id, current_user)


@router.delete("/{alert_id}")
def delete_alert(
    alert_id: UUID,
    db: Session = Depends(get_db),
    _: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.delete_alert(db, alert_id)
