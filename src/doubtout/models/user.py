"""User model for students and professors."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doubtout.models.base import Base

if TYPE_CHECKING:
    from doubtout.models.answer import Answer
    from doubtout.models.doubt import Doubt


class UserRole(StrEnum):
    """Role chosen at signup; never changes afterwards."""

    STUDENT = "student"
    PROFESSOR = "professor"


class User(Base):
    """Represents a registered campus user."""

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("points >= 0", name="ck_users_points"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
    )
    points: Mapped[int] = mapped_column(default=0, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    doubts: Mapped[list[Doubt]] = relationship(
        "Doubt", back_populates="asker", foreign_keys="Doubt.asker_id"
    )
    answers: Mapped[list[Answer]] = relationship("Answer", back_populates="author")
