# app/crud/users/user_management_crud.py
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup, Pagination, UserToken
from shared.helpers.json_response_helper import conflict_response, error_response, not_found_response
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ...schemas.users.users_schemas import UserCreate, UserListResponse, UserOut, UserRequest, UserUpdate

logger = logging.getLogger(__name__)


def build_user_filters(params: UserRequest):
    filters = []

    if params.role:
        filters.append(Users.role == params.role.value)

    if params.active is not None:
        filters.append(Users.is_active == params.active)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(
            or_(
                Users.name.ilike(search_term),
                Users.email.ilike(search_term)
            )
        )

    return filters


def get_users(db: Session, params: UserRequest) -> UserListResponse:
    filters = build_user_filters(params)
    base_query = db.query(Users).filter(*filters)

    total = base_query.with_entities(func.count(Users.id)).scalar() or 0

    users = (
        base_query
        .order_by(Users.created_at.desc(), Users.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return UserListResponse(
        total_users=total,
        users=[UserOut.model_validate(u) for u in users],
        pagination=Pagination.build(params, total)
    )


def get_user_by_id(db: Session, user_id: UUID) -> Optional[Users]:
    return db.query(Users).filter(Users.id == user_id).first()


def get_user(db: Session, user_id: UUID) -> UserOut:
    user = get_user_by_id(db, user_id)
    if not user:
        return not_found_response("User not found")
    return UserOut.model_validate(user)


def roles_lookup() -> List[Lookup]:
    return [
        Lookup(id=role.value, name=role.name.capitalize())
        for role in UserRole
    ]


def email_exists(db: Session, email: str, exclude_id: Optional[UUID] = None) -> bool:
    query = db.query(Users.id).filter(Users.email == email.lower())
    if exclude_id:
        query = query.filter(Users.id != exclude_id)
    return query.first() is not None


def create_user(db: Session, user: UserCreate, current_user: Optional[UserToken] = None) -> UserOut:
    if email_exists(db, user.email):
        return conflict_response("A user with that email already exists")

    db_user = Users(
        name=user.name,
        email=user.email.lower(),
        role=user.role.value,
        is_active=user.is_active,
        created_by=UUID(current_user.user_id) if current_user else None,
    )
    db_user.set_password(user.password)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict_response("A user with that email already exists")
    db.refresh(db_user)

    logger.info("User %s (%s) created with role %s",
                db_user.id, db_user.email, db_user.role)
    return UserOut.model_validate(db_user)


def update_user(db: Session, user_id: UUID, user: UserUpdate, current_user: UserToken) -> UserOut:
    if user.is_active is False:
        _reject_self(user_id, current_user, "deactivate")
    if user.role is not None and user.role != UserRole.ADMIN:
        _reject_self(user_id, current_user, "demote")

    db_user = get_user_by_id(db, user_id)
    if not db_user:
        return not_found_response("User not found")

    update_data = user.model_dump(exclude_unset=True)

    if "email" in update_data and email_exists(db, update_data["email"], exclude_id=db_user.id):
        return conflict_response("A user with that email already exists")

    password = update_data.pop("password", None)
    if "role" in update_data:
        update_data["role"] = UserRole(update_data["role"]).value

    for key, value in update_data.items():
        setattr(db_user, key, value)
    if password:
        db_user.set_password(password)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return conflict_response("A user with that email already exists")
    db.refresh(db_user)
    return UserOut.model_validate(db_user)


def _reject_self(user_id: UUID, current_user: UserToken, action: str):
    if str(user_id) == current_user.user_id:
        return error_response(
            message=f"You cannot {action} your own account",
            status_code=AppStatusCode.OPERATION_FAILED,
            http_status=400
        )


def set_user_active(db: Session, user_id: UUID, is_active: bool, current_user: UserToken) -> UserOut:
    if not is_active:
        _reject_self(user_id, current_user, "deactivate")

    db_user = get_user_by_id(db, user_id)
    if not db_user:
        return not_found_response("User not found")

    db_user.is_active = is_active
    db.commit()
    db.refresh(db_user)

    logger.info("User %s %s", user_id, "activated" if is_active else "deactivated")
    return UserOut.model_validate(db_user)


def delete_user(db: Session, user_id: UUID, current_user: UserToken):
    _reject_self(user_id, current_user, "delete")

    db_user = get_user_by_id(db, user_id)
    if not db_user:
        return not_found_response("User not found")

    db.delete(db_user)
    db.commit()
    logger.info("User %s deleted", user_id)
    return {"message": "User deleted successfully"}
