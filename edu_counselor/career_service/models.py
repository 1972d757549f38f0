import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..shared.database import Base, TextArray, utcnow


class CareerPath(Base):
    __tablename__ = "career_paths"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    required_education: Mapped[str] = mapped_column(Text, nullable=False)
    average_salary: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
    job_outlook: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills_required: Mapped[list[str] | None] = mapped_column(TextArray, nullable=True)
    related_courses: Mapped[list[str] | None] = mapped_column(TextArray, nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=utcnow)
