import uuid
from datetime import date

from sqlalchemy.orm import Session

from ..shared.policies import get_visible, visible
from .models import Scholarship


def list_scholarships(
    db: Session,
    principal: uuid.UUID | None,
    category: str | None = None,
    upcoming_only: bool = False,
    today: date | None = None,
):
    # the select policy already hides inactive rows
    q = visible(db, Scholarship, principal)
    if category:
        q = q.filter(Scholarship.category == category)
    if upcoming_only:
        q = q.filter(Scholarship.deadline >= (today or date.today()))
    return q.order_by(Scholarship.deadline.asc(), Scholarship.title.asc()).all()


def get_scholarship(db: Session, principal: uuid.UUID | None, scholarship_id: uuid.UUID) -> Scholarship:
    return get_visible(db, Scholarship, principal, scholarship_id, resource="Scholarship")
