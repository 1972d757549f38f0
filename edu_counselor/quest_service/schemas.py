import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

QuestStatus = Literal["pending", "in_progress", "completed"]

# path segments under /quests that are not quest types
RESERVED_QUEST_TYPES = {"summary"}


class ProgressRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    quest_type: str
    status: str | None = None
    points: int | None = None
    # the ORM attribute is metadata_, the column and the wire name are metadata
    metadata: dict[str, Any] | None = Field(default=None, validation_alias=AliasChoices("metadata_", "metadata"))
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProgressInsert(BaseModel):
    # defaults to the caller; anything else is rejected by the insert policy
    user_id: uuid.UUID | None = None
    quest_type: str = Field(min_length=1, description="profile, scholarship, college_research, ...")
    status: QuestStatus = "pending"
    points: int = Field(default=0, ge=0)
    metadata: dict[str, Any] | None = None
    completed_at: datetime | None = None

    @field_validator("quest_type")
    @classmethod
    def not_reserved(cls, v: str) -> str:
        if v in RESERVED_QUEST_TYPES:
            raise ValueError(f"quest_type {v!r} is reserved")
        return v


class ProgressUpdate(BaseModel):
    status: QuestStatus | None = None
    points: int | None = Field(default=None, ge=0)
    metadata: dict[str, Any] | None = None
    completed_at: datetime | None = None
    # accepted for shape compatibility, always replaced on write
    updated_at: datetime | None = None


class QuestSummary(BaseModel):
    total_points: int
    completed: int
    in_progress: int
    pending: int
