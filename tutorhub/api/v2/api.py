# Fichier: tutorhub/api/v2/api.py
from fastapi import APIRouter
from .endpoints import (
    user_router,
    tutorial_router,
    progress_router,
    admin_router,
)

api_router = APIRouter()

api_router.include_router(user_router.router, prefix="/users", tags=["Users"])
api_router.include_router(tutorial_router.router, prefix="/tutorials", tags=["Tutorials"])
api_router.include_router(tutorial_router.categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(progress_router.router, prefix="/progress", tags=["Progress"])
api_router.include_router(admin_router.router, prefix="/admin", tags=["Admin"])
