"""Database models package."""

from doubtout.models.answer import Answer
from doubtout.models.base import Base
from doubtout.models.doubt import Doubt, DoubtStatus
from doubtout.models.practice_answer import PracticeAnswer, PracticeStatus
from doubtout.models.subject import Subject
from doubtout.models.user import User, UserRole

__all__ = [
    "Answer",
    "Base",
    "Doubt",
    "DoubtStatus",
    "PracticeAnswer",
    "PracticeStatus",
    "Subject",
    "User",
    "UserRole",
]
