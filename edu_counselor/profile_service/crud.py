import uuid

from sqlalchemy.orm import Session

from ..shared.database import commit_unique
from ..shared.errors import NotFound, ValidationError
from ..shared.policies import check_write, visible
from ..shared.triggers import handle_new_user
from .models import Profile


def get_profile(db: Session, principal: uuid.UUID | None, profile_id: uuid.UUID) -> Profile:
    p = visible(db, Profile, principal).filter(Profile.id == profile_id).first()
    if not p:
        raise NotFound.row("Profile", profile_id)
    return p


def get_or_bootstrap_me(db: Session, principal: uuid.UUID) -> Profile:
    """
    Profile of the caller. Principals created before the signup hook existed
    get their row created here, the same way signup would.
    """
    try:
        return get_profile(db, principal, principal)
    except NotFound:
        return handle_new_user(db, principal, {})


def create_profile(db: Session, principal: uuid.UUID | None, payload: dict) -> Profile:
    data = dict(payload)
    if data.get("id") is None:
        data["id"] = principal
    p = Profile(**data)
    check_write(db, p, principal, "insert")
    db.add(p)
    commit_unique(db, "Profile already exists")
    db.refresh(p)
    return p


def update_profile(db: Session, principal: uuid.UUID | None, profile_id: uuid.UUID, payload: dict) -> Profile:
    """
    Update ONLY the caller's profile.
    Fields not provided remain unchanged.
    """
    if not payload:
        raise ValidationError("No fields to update")

    p = visible(db, Profile, principal, "update").filter(Profile.id == profile_id).first()
    if not p:
        raise NotFound.row("Profile", profile_id)

    for field, value in payload.items():
        if hasattr(p, field):
            setattr(p, field, value)

    check_write(db, p, principal, "update")
    db.commit()
    db.refresh(p)
    return p
