"""
Row-level access policies.

Every table declares which actions a principal may perform and the
predicate a row has to satisfy. The semantics mirror PostgreSQL RLS:

- ``using`` filters rows for select/update/delete. A row that fails it is
  simply invisible, so callers end up with NotFound rather than a denial.
- ``check`` validates the row being written (insert, and the new values of
  an update). A failing check raises AuthorizationDenied.
- An action without a policy is denied outright.

Crud modules never query user-scoped tables without going through here.
Administrative code (seeding) talks to the session directly.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy import exists, select, true
from sqlalchemy.orm import Query, Session

from ..models import (
    CareerPath,
    ChatConversation,
    ChatMessage,
    College,
    Profile,
    Scholarship,
    UserProgress,
    UserSavedItem,
)
from .errors import AuthorizationDenied, NotFound

logger = logging.getLogger(__name__)

ACTIONS = ("select", "insert", "update", "delete")


@dataclass(frozen=True)
class Policy:
    name: str
    using: Optional[Callable[[uuid.UUID], Any]] = None
    check: Optional[Callable[[Session, uuid.UUID, Any], bool]] = None


def _owner(model, column: str, name: str) -> Policy:
    col = getattr(model, column)
    return Policy(
        name=name,
        using=lambda uid: col == uid,
        check=lambda db, uid, row: getattr(row, column) == uid,
    )


def _authenticated(name: str, predicate=None) -> Policy:
    # the principal does not matter, only that there is one
    clause = predicate if predicate is not None else true()
    return Policy(name=name, using=lambda uid: clause)


def _conversation_owned(conversation_id, uid):
    return exists().where(
        ChatConversation.id == conversation_id,
        ChatConversation.user_id == uid,
    )


def _message_check(db: Session, uid: uuid.UUID, row: ChatMessage) -> bool:
    if row.conversation_id is None:
        return False
    return bool(db.scalar(select(_conversation_owned(row.conversation_id, uid))))


POLICIES: dict[type, dict[str, Policy]] = {
    Profile: {
        "select": _owner(Profile, "id", "Users can view their own profile"),
        "update": _owner(Profile, "id", "Users can update their own profile"),
        "insert": _owner(Profile, "id", "Users can insert their own profile"),
    },
    College: {
        "select": _authenticated("Anyone can view colleges"),
    },
    Scholarship: {
        "select": _authenticated("Anyone can view active scholarships", Scholarship.is_active.is_(True)),
    },
    CareerPath: {
        "select": _authenticated("Anyone can view career paths"),
    },
    ChatConversation: {
        "select": _owner(ChatConversation, "user_id", "Users can view their own conversations"),
        "insert": _owner(ChatConversation, "user_id", "Users can create their own conversations"),
        "update": _owner(ChatConversation, "user_id", "Users can update their own conversations"),
        "delete": _owner(ChatConversation, "user_id", "Users can delete their own conversations"),
    },
    ChatMessage: {
        "select": Policy(
            name="Users can view messages in their conversations",
            using=lambda uid: _conversation_owned(ChatMessage.conversation_id, uid),
        ),
        "insert": Policy(
            name="Users can insert messages in their conversations",
            check=_message_check,
        ),
    },
    UserProgress: {
        "select": _owner(UserProgress, "user_id", "Users can view their own progress"),
        "insert": _owner(UserProgress, "user_id", "Users can insert their own progress"),
        "update": _owner(UserProgress, "user_id", "Users can update their own progress"),
    },
    UserSavedItem: {
        "select": _owner(UserSavedItem, "user_id", "Users can view their own saved items"),
        "insert": _owner(UserSavedItem, "user_id", "Users can insert their own saved items"),
        "delete": _owner(UserSavedItem, "user_id", "Users can delete their own saved items"),
    },
}


def policy_for(model, action: str) -> Policy | None:
    if action not in ACTIONS:
        raise ValueError(f"Unknown action: {action}")
    return POLICIES.get(model, {}).get(action)


def _require(model, action: str, principal: uuid.UUID | None) -> Policy:
    if principal is None:
        raise AuthorizationDenied("Authentication required")
    p = policy_for(model, action)
    if p is None:
        logger.warning("No %s policy on %s", action, model.__tablename__)
        raise AuthorizationDenied(f"{action} on {model.__tablename__} is not permitted")
    return p


def visible(db: Session, model, principal: uuid.UUID | None, action: str = "select") -> Query:
    """Query over the rows of ``model`` the principal may ``action``."""
    p = _require(model, action, principal)
    q = db.query(model)
    # updates/deletes can only touch rows the principal is also able to see
    if action != "select":
        sel = policy_for(model, "select")
        if sel is None or sel.using is None:
            raise AuthorizationDenied(f"{action} on {model.__tablename__} is not permitted")
        q = q.filter(sel.using(principal))
    if p.using is not None:
        q = q.filter(p.using(principal))
    return q


def get_visible(db: Session, model, principal: uuid.UUID | None, row_id, action: str = "select", resource: str | None = None):
    row = visible(db, model, principal, action).filter(model.id == row_id).first()
    if row is None:
        raise NotFound.row(resource or model.__name__, row_id)
    return row


def check_write(db: Session, row, principal: uuid.UUID | None, action: str = "insert") -> None:
    """Raise AuthorizationDenied unless ``row`` passes the action's check."""
    model = type(row)
    p = _require(model, action, principal)
    if p.check is not None and not p.check(db, principal, row):
        logger.warning("Policy %r rejected %s on %s for %s", p.name, action, model.__tablename__, principal)
        # discard pending attribute changes, like an aborted statement
        db.rollback()
        raise AuthorizationDenied(
            f'new row violates row-level security policy for table "{model.__tablename__}"'
        )
