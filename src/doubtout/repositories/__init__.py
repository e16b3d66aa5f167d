"""Repository layer for database operations."""

from doubtout.repositories.answer import AnswerRepository
from doubtout.repositories.doubt import DoubtRepository
from doubtout.repositories.practice_answer import PracticeAnswerRepository
from doubtout.repositories.subject import SubjectRepository
from doubtout.repositories.user import UserRepository

__all__ = [
    "AnswerRepository",
    "DoubtRepository",
    "PracticeAnswerRepository",
    "SubjectRepository",
    "UserRepository",
]
