import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConversationRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    title: str | None = None
    language: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ConversationInsert(BaseModel):
    # defaults to the caller; anything else is rejected by the insert policy
    user_id: uuid.UUID | None = None
    title: str | None = None
    language: str | None = Field(default="en")


class ConversationUpdate(BaseModel):
    title: str | None = None
    language: str | None = None
    user_id: uuid.UUID | None = None
    # accepted for shape compatibility, always replaced on write
    updated_at: datetime | None = None


class MessageRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    conversation_id: uuid.UUID
    content: str
    is_user: bool
    created_at: datetime | None = None


class MessageInsert(BaseModel):
    content: str = Field(min_length=1)
    is_user: bool


class ChatIn(BaseModel):
    message: str = Field(min_length=1)


class ChatOut(BaseModel):
    conversation_id: uuid.UUID
    user_message: MessageRow
    reply: MessageRow
