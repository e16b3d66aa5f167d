"""Answer model for professor-authored answers."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doubtout.models.base import Base

if TYPE_CHECKING:
    from doubtout.models.doubt import Doubt
    from doubtout.models.user import User


class Answer(Base):
    """Represents the professor answer to a doubt."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(primary_key=True)
    doubt_id: Mapped[int] = mapped_column(
        ForeignKey("doubts.id"), unique=True, nullable=False
    )
    answer_text: Mapped[str] = mapped_column(Text, nullable=False)
    answered_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    doubt: Mapped[Doubt] = relationship("Doubt", back_populates="answer")
    author: Mapped[User] = relationship("User", back_populates="answers")
