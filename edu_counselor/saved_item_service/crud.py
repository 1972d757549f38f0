import uuid

from sqlalchemy.orm import Session

from ..shared.database import commit_unique
from ..shared.policies import check_write, get_visible, visible
from .models import UserSavedItem


def list_saved(db: Session, principal: uuid.UUID | None, item_type: str | None = None):
    q = visible(db, UserSavedItem, principal)
    if item_type:
        q = q.filter(UserSavedItem.item_type == item_type)
    return q.order_by(UserSavedItem.created_at.desc()).all()


def save_item(db: Session, principal: uuid.UUID | None, payload: dict) -> UserSavedItem:
    data = dict(payload)
    if data.get("user_id") is None:
        data["user_id"] = principal
    s = UserSavedItem(**data)
    check_write(db, s, principal, "insert")
    db.add(s)
    commit_unique(db, f"This {s.item_type} is already saved")
    db.refresh(s)
    return s


def delete_saved(db: Session, principal: uuid.UUID | None, saved_id: uuid.UUID) -> None:
    s = get_visible(db, UserSavedItem, principal, saved_id, "delete", resource="Saved item")
    db.delete(s)
    db.commit()
