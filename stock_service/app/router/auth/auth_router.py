from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_roles, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.auth import auth_crud
from ...crud.users import user_management_crud
from ...schemas.auth.auth_schemas import AuthUser, LoginRequest, LoginResponse
from ...schemas.users.users_schemas import UserCreate, UserOut

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    return auth_crud.login(db, request)


# Only administrators may create accounts
@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(allow_roles(UserRole.ADMIN))
):
    return user_management_crud.create_user(db, user, current_user)


@router.get("/me", response_model=AuthUser)
def me(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return auth_crud.get_me(db, current_user.user_id)
