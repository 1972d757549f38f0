import uuid

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..shared.policies import get_visible, visible
from .models import CareerPath


def list_career_paths(db: Session, principal: uuid.UUID | None, q: str | None = None):
    query = visible(db, CareerPath, principal)
    if q:
        term = q.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        like = f"%{term}%"
        query = query.filter(or_(
            CareerPath.title.ilike(like, escape="\\"),
            CareerPath.description.ilike(like, escape="\\"),
        ))
    return query.order_by(CareerPath.title.asc()).all()


def get_career_path(db: Session, principal: uuid.UUID | None, career_id: uuid.UUID) -> CareerPath:
    return get_visible(db, CareerPath, principal, career_id, resource="Career path")
