import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CareerPathInsert(BaseModel):
    title: str
    description: str
    required_education: str
    average_salary: float | None = None
    job_outlook: str | None = None
    skills_required: list[str] | None = None
    related_courses: list[str] | None = None


class CareerPathRow(CareerPathInsert):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime | None = None
