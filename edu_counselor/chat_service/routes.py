import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.principal import current_user_id
from . import assistant
from .crud import (
    add_message,
    create_conversation,
    delete_conversation,
    ensure_title,
    get_conversation,
    list_conversations,
    list_messages,
    update_conversation,
)
from .schemas import (
    ChatIn,
    ChatOut,
    ConversationInsert,
    ConversationRow,
    ConversationUpdate,
    MessageInsert,
    MessageRow,
)


def build_router(SessionLocal):
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/conversations", response_model=list[ConversationRow])
    def conversations(request: Request, db: Session = Depends(get_db)):
        return list_conversations(db, current_user_id(request))

    @router.post("/conversations", response_model=ConversationRow, status_code=status.HTTP_201_CREATED)
    def start(payload: ConversationInsert, request: Request, db: Session = Depends(get_db)):
        return create_conversation(db, current_user_id(request), payload.model_dump())

    @router.get("/conversations/{conversation_id}", response_model=ConversationRow)
    def get_one(conversation_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        return get_conversation(db, current_user_id(request), conversation_id)

    @router.patch("/conversations/{conversation_id}", response_model=ConversationRow)
    def rename(conversation_id: uuid.UUID, payload: ConversationUpdate, request: Request, db: Session = Depends(get_db)):
        return update_conversation(db, current_user_id(request), conversation_id, payload.model_dump(exclude_unset=True))

    @router.delete("/conversations/{conversation_id}", response_model=dict)
    def remove(conversation_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        delete_conversation(db, current_user_id(request), conversation_id)
        return {"deleted": True}

    @router.get("/conversations/{conversation_id}/messages", response_model=list[MessageRow])
    def messages(conversation_id: uuid.UUID, request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        get_conversation(db, uid, conversation_id)
        return list_messages(db, uid, conversation_id)

    @router.post(
        "/conversations/{conversation_id}/messages",
        response_model=MessageRow,
        status_code=status.HTTP_201_CREATED,
    )
    def post_message(conversation_id: uuid.UUID, payload: MessageInsert, request: Request, db: Session = Depends(get_db)):
        return add_message(db, current_user_id(request), conversation_id, payload.content, payload.is_user)

    @router.post("/conversations/{conversation_id}/reply", response_model=ChatOut)
    def reply(conversation_id: uuid.UUID, payload: ChatIn, request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        conversation = get_conversation(db, uid, conversation_id)

        user_msg = add_message(db, uid, conversation_id, payload.message, True)
        conversation = ensure_title(db, uid, conversation, payload.message)

        history = list_messages(db, uid, conversation_id, limit=assistant.HISTORY_LIMIT)
        text = assistant.generate_reply(history, conversation.language)
        bot_msg = add_message(db, uid, conversation_id, text, False)

        return ChatOut(
            conversation_id=conversation_id,
            user_message=MessageRow.model_validate(user_msg),
            reply=MessageRow.model_validate(bot_msg),
        )

    return router
