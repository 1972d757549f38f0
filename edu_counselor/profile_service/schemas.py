import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    full_name: str | None = None
    phone: str | None = None
    preferred_language: str | None = None
    education_level: str | None = None
    interests: list[str] | None = None
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileInsert(BaseModel):
    # defaults to the caller; anything else is rejected by the insert policy
    id: uuid.UUID | None = None
    full_name: str | None = None
    phone: str | None = None
    preferred_language: str | None = Field(default="en")
    education_level: str | None = None
    interests: list[str] | None = Field(default=None, description="e.g. ['engineering', 'design']")
    location: str | None = None


class ProfileUpdate(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    preferred_language: str | None = None
    education_level: str | None = None
    interests: list[str] | None = None
    location: str | None = None
    # accepted for shape compatibility, always replaced on write
    updated_at: datetime | None = None
