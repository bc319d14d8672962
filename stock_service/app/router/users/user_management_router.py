from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles
from shared.core.database import get_db
from shared.core.schemas import Lookup, UserToken
from shared.utils.enums import UserRole
from ...crud.users import user_management_crud as crud
from ...schemas.users.users_schemas import UserCreate, UserListResponse, UserOut, UserRequest, UserUpdate

router = APIRouter(prefix="/api/users",
                   tags=["users"], dependencies=[Depends(allow_roles(UserRole.ADMIN))])


@router.get("", response_model=UserListResponse)
def get_users(
    params: UserRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_users(db, params)


@router.get("/roles-lookup", response_model=List[Lookup])
def roles_lookup():
    return crud.roles_lookup()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return crud.get_user(db, user_id)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.create_user(db, user, current_user)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: UUID,
    user: UserUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.update_user(db, user_id, user, current_user)


@router.patch("/{user_id}/activate", response_model=UserOut)
def activate_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.set_user_active(db, user_id, True, current_user)


@router.patch("/{user_id}/deactivate", response_model=UserOut)
def deactivate_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.set_user_active(db, user_id, False, current_user)


@router.delete("/{user_id}")
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return crud.delete_user(db, user_id, current_user)
