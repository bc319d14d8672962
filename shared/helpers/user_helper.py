from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.models.users import Users


def get_users_bulk(db: Session, user_ids: Iterable[Optional[UUID]]) -> Dict[UUID, Users]:
    ids = {uid for uid in user_ids if uid}
    if not ids:
        return {}

    users = (
        db.query(Users)
        .filter(Users.id.in_(ids))
        .all()
    )

    return {u.id: u for u in users}
