"""API routers."""

from doubtout.routers.answers import router as answers_router
from doubtout.routers.auth import router as auth_router
from doubtout.routers.catalog import router as catalog_router
from doubtout.routers.doubts import router as doubts_router
from doubtout.routers.points import router as points_router
from doubtout.routers.practice import router as practice_router

__all__ = [
    "answers_router",
    "auth_router",
    "catalog_router",
    "doubts_router",
    "points_router",
    "practice_router",
]
