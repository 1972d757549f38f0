import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

ItemType = Literal["college", "scholarship", "career"]


class SavedItemRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    item_type: str
    item_id: uuid.UUID
    notes: str | None = None
    created_at: datetime | None = None


class SavedItemInsert(BaseModel):
    # defaults to the caller; anything else is rejected by the insert policy
    user_id: uuid.UUID | None = None
    item_type: ItemType
    item_id: uuid.UUID
    notes: str | None = None
