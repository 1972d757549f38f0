import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class CollegeInsert(BaseModel):
    name: str
    type: str
    location: str
    state: str
    fees_per_year: float | None = None
    ranking: int | None = None
    admission_criteria: str | None = None
    contact_info: dict[str, Any] | None = None


class CollegeRow(CollegeInsert):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime | None = None
