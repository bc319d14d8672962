import logging
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.models.users import Users
from shared.utils.enums import UserRole

logger = logging.getLogger(__name__)


def ensure_admin_user(db: Session) -> Users:
    """Create the configured admin if no user owns that email yet.

    An existing account is left untouched, its password is never reset.
    """
    email = settings.ADMIN_EMAIL.strip().lower()
    existing = db.query(Users).filter(Users.email == email).first()
    if existing:
        logger.info("Admin user already exists: %s", email)
        return existing

    admin = Users(
        name=settings.ADMIN_NAME,
        email=email,
        role=UserRole.ADMIN.value,
        is_active=True,
    )
    admin.set_password(settings.ADMIN_PASSWORD)
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Admin user created: %s", email)
    return admin
