"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.groups import router as groups_router
from api.v1.routes.names import router as names_router
from api.v1.routes.posts import router as posts_router
from api.v1.routes.profiles import router as profiles_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(groups_router)
router.include_router(posts_router)
router.include_router(names_router)
