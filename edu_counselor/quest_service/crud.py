import uuid

from sqlalchemy.orm import Session

from ..shared.database import commit_unique, utcnow
from ..shared.errors import NotFound, ValidationError
from ..shared.policies import check_write, visible
from .models import QUEST_STATUSES, UserProgress


def _to_columns(payload: dict) -> dict:
    data = dict(payload)
    if "metadata" in data:
        data["metadata_"] = data.pop("metadata")
    return data


def _stamp_completion(p: UserProgress, payload: dict) -> None:
    if p.status == "completed" and p.completed_at is None and "completed_at" not in payload:
        p.completed_at = utcnow()


def list_progress(db: Session, principal: uuid.UUID | None):
    q = visible(db, UserProgress, principal)
    return q.order_by(UserProgress.created_at.asc()).all()


def get_progress(db: Session, principal: uuid.UUID | None, quest_type: str, action: str = "select") -> UserProgress:
    p = visible(db, UserProgress, principal, action).filter(UserProgress.quest_type == quest_type).first()
    if not p:
        raise NotFound.row("Quest progress", quest_type)
    return p


def create_progress(db: Session, principal: uuid.UUID | None, payload: dict) -> UserProgress:
    data = _to_columns(payload)
    if data.get("user_id") is None:
        data["user_id"] = principal
    p = UserProgress(**data)
    _stamp_completion(p, {})
    check_write(db, p, principal, "insert")
    db.add(p)
    commit_unique(db, f"Progress for quest '{p.quest_type}' already exists")
    db.refresh(p)
    return p


def update_progress(db: Session, principal: uuid.UUID | None, quest_type: str, payload: dict) -> UserProgress:
    if not payload:
        raise ValidationError("No fields to update")

    p = get_progress(db, principal, quest_type, "update")
    for field, value in _to_columns(payload).items():
        if hasattr(p, field):
            setattr(p, field, value)
    _stamp_completion(p, payload)

    check_write(db, p, principal, "update")
    db.commit()
    db.refresh(p)
    return p


def summarize(rows: list[UserProgress]) -> dict:
    counts = {s: 0 for s in QUEST_STATUSES}
    total = 0
    for r in rows:
        status = r.status or "pending"
        counts[status] = counts.get(status, 0) + 1
        # points only count once the quest is done
        if status == "completed":
            total += r.points or 0
    return {"total_points": total, **counts}
