"""
Shared router dependencies: authentication and role checks.
"""

import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.database import get_db
from registrar.core.errors import AuthenticationError, PermissionDeniedError
from registrar.core.security import decode_access_token
from registrar.crud import admin_crud
from registrar.models.admin import Admin, AdminRole


# Bearer scheme for token authentication; missing headers are handled below
bearer_scheme = HTTPBearer(auto_error=False)


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    """
    Read the session token from the Authorization header, falling back
    to the cookie set at login.
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Access denied. No token provided.")
    return token


def get_current_admin(
    token: str = Depends(get_token),
    db: Session = Depends(get_db)
) -> Admin:
    """
    Get current authenticated admin from JWT token.
    """
    payload = decode_access_token(token)

    try:
        admin_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise AuthenticationError("Invalid token")

    admin = admin_crud.get_admin(db, admin_id)
    if admin is None or not admin.is_active:
        raise AuthenticationError("Invalid token or admin account is inactive")

    return admin


def require_roles(*roles: str):
    """
    Dependency factory restricting a route to the given admin roles.
    """
    allowed = {r.value if isinstance(r, AdminRole) else r for r in roles}

    def role_checker(current_admin: Admin = Depends(get_current_admin)) -> Admin:
        if current_admin.role not in allowed:
            raise PermissionDeniedError("Access denied, insufficient permissions")
        return current_admin

    return role_checker


# Every admin route accepts both roles
get_current_staff = require_roles(AdminRole.ADMIN, AdminRole.SUPER_ADMIN)
