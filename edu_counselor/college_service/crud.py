import uuid

from sqlalchemy.orm import Session

from ..shared.policies import get_visible, visible
from .models import College


def list_colleges(db: Session, principal: uuid.UUID | None, type: str | None = None, state: str | None = None):
    q = visible(db, College, principal)
    if type:
        q = q.filter(College.type == type)
    if state:
        q = q.filter(College.state == state)
    # unranked colleges last
    return q.order_by(College.ranking.is_(None), College.ranking.asc(), College.name.asc()).all()


def get_college(db: Session, principal: uuid.UUID | None, college_id: uuid.UUID) -> College:
    return get_visible(db, College, principal, college_id, resource="College")
