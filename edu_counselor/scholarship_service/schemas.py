import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class ScholarshipInsert(BaseModel):
    title: str
    description: str
    amount: float
    eligibility_criteria: str
    deadline: date
    application_link: str | None = None
    category: str
    is_active: bool | None = True


class ScholarshipRow(ScholarshipInsert):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime | None = None
