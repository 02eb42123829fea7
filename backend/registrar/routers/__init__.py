"""
API routers for the Registrar backend.

This module contains all API endpoint routers:
- auth: Admin login and profile
- registrations: Public registration form and admin review
- classes: Class schedule and its management
- teachers: Teacher directory and its management
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .registrations import router as registrations_router
from .classes import router as classes_router
from .teachers import router as teachers_router

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    registrations_router,
    prefix="/registrations",
    tags=["registrations"]
)

api_router.include_router(
    classes_router,
    prefix="/classes",
    tags=["classes"]
)

api_router.include_router(
    teachers_router,
    prefix="/teachers",
    tags=["teachers"]
)

__all__ = [
    "api_router",
    "auth_router",
    "registrations_router",
    "classes_router",
    "teachers_router"
]
