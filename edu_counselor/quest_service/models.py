import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..shared.database import Base, JsonDocument, utcnow

QUEST_STATUSES = ("pending", "in_progress", "completed")


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("user_id", "quest_type", name="user_progress_user_id_quest_type_key"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    quest_type: Mapped[str] = mapped_column(Text, nullable=False)  # profile/scholarship/college_research/...
    status: Mapped[str | None] = mapped_column(Text, nullable=True, default="pending")
    points: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JsonDocument, nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=utcnow)
