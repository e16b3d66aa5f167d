"""Service layer for business logic."""

from doubtout.services.answers import AnswerService
from doubtout.services.auth import AuthService
from doubtout.services.catalog import CatalogService
from doubtout.services.doubts import DoubtService
from doubtout.services.points import PointsLedger
from doubtout.services.practice import PracticeReviewService

__all__ = [
    "AnswerService",
    "AuthService",
    "CatalogService",
    "DoubtService",
    "PointsLedger",
    "PracticeReviewService",
]
