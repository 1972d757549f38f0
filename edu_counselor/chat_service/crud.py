import uuid

from sqlalchemy.orm import Session

from ..shared.errors import ValidationError
from ..shared.policies import check_write, get_visible, visible
from .models import ChatConversation, ChatMessage

TITLE_MAX = 60


def list_conversations(db: Session, principal: uuid.UUID | None):
    q = visible(db, ChatConversation, principal)
    return q.order_by(ChatConversation.updated_at.desc()).all()


def get_conversation(db: Session, principal: uuid.UUID | None, conversation_id: uuid.UUID) -> ChatConversation:
    return get_visible(db, ChatConversation, principal, conversation_id, resource="Conversation")


def create_conversation(db: Session, principal: uuid.UUID | None, payload: dict) -> ChatConversation:
    data = dict(payload)
    if data.get("user_id") is None:
        data["user_id"] = principal
    c = ChatConversation(**data)
    check_write(db, c, principal, "insert")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


def update_conversation(
    db: Session, principal: uuid.UUID | None, conversation_id: uuid.UUID, payload: dict
) -> ChatConversation:
    if not payload:
        raise ValidationError("No fields to update")

    c = get_visible(db, ChatConversation, principal, conversation_id, "update", resource="Conversation")
    for field, value in payload.items():
        if field == "user_id" and value is None:
            continue
        if hasattr(c, field):
            setattr(c, field, value)

    check_write(db, c, principal, "update")
    db.commit()
    db.refresh(c)
    return c


def delete_conversation(db: Session, principal: uuid.UUID | None, conversation_id: uuid.UUID) -> None:
    c = get_visible(db, ChatConversation, principal, conversation_id, "delete", resource="Conversation")
    db.delete(c)
    db.commit()


def list_messages(db: Session, principal: uuid.UUID | None, conversation_id: uuid.UUID, limit: int | None = None):
    q = visible(db, ChatMessage, principal).filter(ChatMessage.conversation_id == conversation_id)
    if limit:
        # newest `limit` messages, returned oldest first
        rows = q.order_by(ChatMessage.created_at.desc()).limit(limit).all()
        return list(reversed(rows))
    return q.order_by(ChatMessage.created_at.asc()).all()


def add_message(
    db: Session, principal: uuid.UUID | None, conversation_id: uuid.UUID, content: str, is_user: bool
) -> ChatMessage:
    m = ChatMessage(conversation_id=conversation_id, content=content, is_user=is_user)
    check_write(db, m, principal, "insert")
    db.add(m)
    db.commit()
    db.refresh(m)
    return m


def title_from(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= TITLE_MAX:
        return text
    return text[: TITLE_MAX - 3].rstrip() + "..."


def ensure_title(db: Session, principal: uuid.UUID | None, conversation: ChatConversation, first_message: str):
    if conversation.title:
        return conversation
    return update_conversation(db, principal, conversation.id, {"title": title_from(first_message)})
