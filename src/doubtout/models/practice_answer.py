"""Practice answer model for peer answers awaiting professor review."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doubtout.models.base import Base

if TYPE_CHECKING:
    from doubtout.models.doubt import Doubt


class PracticeStatus(StrEnum):
    """Review state. PENDING moves once to APPROVED or REJECTED."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PracticeAnswer(Base):
    """Represents a student answer to another student's doubt."""

    __tablename__ = "practice_answers"

    id: Mapped[int] = mapped_column(primary_key=True)
    doubt_id: Mapped[int] = mapped_column(ForeignKey("doubts.id"), nullable=False)
    student_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[PracticeStatus] = mapped_column(
        Enum(
            PracticeStatus,
            name="practice_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        default=PracticeStatus.PENDING,
        nullable=False,
    )
    reviewed_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    doubt: Mapped[Doubt] = relationship("Doubt", back_populates="practice_answers")
