"""Doubt model for student-submitted questions."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doubtout.models.base import Base

if TYPE_CHECKING:
    from doubtout.models.answer import Answer
    from doubtout.models.practice_answer import PracticeAnswer
    from doubtout.models.user import User


class DoubtStatus(StrEnum):
    """Answer state of a doubt."""

    PENDING = "pending"
    ANSWERED = "answered"


class Doubt(Base):
    """Represents a question asked by a student."""

    __tablename__ = "doubts"

    id: Mapped[int] = mapped_column(primary_key=True)
    asker_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    branch: Mapped[str] = mapped_column(String(100), nullable=False)
    semester: Mapped[int] = mapped_column(nullable=False)
    course: Mapped[str] = mapped_column(String(255), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    # NULL means the doubt sits in the open pool
    assigned_professor_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    status: Mapped[DoubtStatus] = mapped_column(
        Enum(
            DoubtStatus,
            name="doubt_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        default=DoubtStatus.PENDING,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    asker: Mapped[User] = relationship(
        "User", back_populates="doubts", foreign_keys=[asker_id]
    )
    answer: Mapped[Answer | None] = relationship("Answer", back_populates="doubt")
    practice_answers: Mapped[list[PracticeAnswer]] = relationship(
        "PracticeAnswer", back_populates="doubt"
    )
