"""
Authentication router for the Registrar backend.

Handles admin login and the admin's own profile.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.database import get_db
from registrar.models.admin import Admin
from registrar.routers.deps import get_current_admin
from registrar.schemas.auth import AdminResponse, LoginData, LoginRequest, ProfileUpdate
from registrar.schemas.common import ApiResponse
from registrar.services.auth_service import AuthService


router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginData])
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Log an admin in with email and password.
    """
    admin, token = AuthService(db).login(credentials.email, credentials.password)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        path="/"
    )

    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "admin": AdminResponse.model_validate(admin),
            "token": token,
        },
    }


@router.get("/profile", response_model=ApiResponse[AdminResponse])
def get_profile(
    current_admin: Admin = Depends(get_current_admin)
) -> Dict[str, Any]:
    """
    Get current admin information.
    """
    return {"success": True, "data": AdminResponse.model_validate(current_admin)}


@router.put("/profile", response_model=ApiResponse[AdminResponse])
def update_profile(
    profile: ProfileUpdate,
    current_admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update the current admin's username and/or email.
    """
    admin = AuthService(db).update_profile(current_admin, profile)
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": AdminResponse.model_validate(admin),
    }
