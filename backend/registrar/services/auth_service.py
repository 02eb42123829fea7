"""
Admin authentication and profile management.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from sqlalchemy.orm import Session

from registrar.core.errors import AuthenticationError, ConflictError
from registrar.core.security import create_access_token, verify_password
from registrar.crud import admin_crud
from registrar.models.admin import Admin
from registrar.schemas.auth import ProfileUpdate


logger = logging.getLogger(__name__)


def token_claims(admin: Admin) -> Dict[str, Any]:
    """Claims carried by an admin session token besides ``sub``."""
    return {
        "admin_id": str(admin.id),
        "email": admin.email,
        "role": admin.role,
    }


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def login(self, email: str, password: str) -> Tuple[Admin, str]:
        """
        Check admin credentials and issue a session token.

        Unknown, inactive and wrong-password logins fail with the same
        message.

        Returns:
            Tuple[Admin, str]: The admin and the signed token
        """
        admin = admin_crud.get_admin_by_email(self.db, email)
        if not admin or not admin.is_active:
            logger.info(f"Login rejected for {email}: unknown or inactive account")
            raise AuthenticationError("Invalid email or password")

        if not verify_password(password, admin.hashed_password):
            logger.info(f"Login rejected for {email}: wrong password")
            raise AuthenticationError("Invalid email or password")

        token = create_access_token(subject=str(admin.id), additional_claims=token_claims(admin))

        try:
            admin_crud.update_admin(self.db, admin, {"last_login_at": datetime.now(timezone.utc)})
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(admin)

        logger.info(f"Admin login successful: {admin.email}")
        return admin, token

    def update_profile(self, admin: Admin, profile: ProfileUpdate) -> Admin:
        changes = profile.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            other = admin_crud.get_admin_by_email(self.db, changes["email"])
            if other and other.id != admin.id:
                raise ConflictError("Email is already in use")
        if "username" in changes:
            other = admin_crud.get_admin_by_username(self.db, changes["username"])
            if other and other.id != admin.id:
                raise ConflictError("Username is already taken")

        try:
            admin_crud.update_admin(self.db, admin, changes)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(admin)
        logger.info(f"Admin profile updated: {admin.id}")
        return admin
