"""
Derived writes that run no matter which code path touched the row.

- ``handle_new_user`` creates the profile for a freshly signed-up principal.
- ``updated_at`` is rewritten on every ORM update of the tables below.
- ``handle_deleted_user`` drops every row a removed principal owned.
"""
import logging
import uuid
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import ChatConversation, Profile, UserProgress, UserSavedItem
from .database import utcnow

logger = logging.getLogger(__name__)

TIMESTAMPED = (Profile, ChatConversation, UserProgress)


def _set_updated_at(mapper, connection, target):
    target.updated_at = utcnow()


for _model in TIMESTAMPED:
    event.listen(_model, "before_update", _set_updated_at)


def handle_new_user(db: Session, user_id: uuid.UUID, user_meta_data: dict[str, Any] | None = None) -> Profile:
    """
    Create the profile row for a new principal.
    Calling it again for the same principal leaves the existing row alone.
    """
    existing = db.get(Profile, user_id)
    if existing is not None:
        return existing

    full_name = (user_meta_data or {}).get("full_name") or ""
    p = Profile(id=user_id, full_name=full_name)
    db.add(p)
    try:
        db.commit()
    except IntegrityError:
        # another signup path created the row between the lookup and the insert
        db.rollback()
        existing = db.get(Profile, user_id)
        if existing is None:
            raise
        return existing
    db.refresh(p)
    logger.info("Created profile for new user %s", user_id)
    return p


def handle_deleted_user(db: Session, user_id: uuid.UUID) -> dict[str, int]:
    counts: dict[str, int] = {}

    conversations = db.query(ChatConversation).filter(ChatConversation.user_id == user_id).all()
    for c in conversations:
        db.delete(c)  # messages go with it
    counts["chat_conversations"] = len(conversations)

    counts["user_progress"] = (
        db.query(UserProgress).filter(UserProgress.user_id == user_id).delete(synchronize_session=False)
    )
    counts["user_saved_items"] = (
        db.query(UserSavedItem).filter(UserSavedItem.user_id == user_id).delete(synchronize_session=False)
    )
    counts["profiles"] = db.query(Profile).filter(Profile.id == user_id).delete(synchronize_session=False)

    db.commit()
    logger.info("Removed data of deleted user %s: %s", user_id, counts)
    return counts
