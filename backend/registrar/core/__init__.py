"""
Core module for the Registrar backend.

This module contains core functionality including:
- Configuration management
- Database connections
- Security utilities (JWT, password hashing)
- Domain errors and their HTTP translation
"""

from .config import settings
from .database import get_db, engine, SessionLocal
from .security import (
    create_access_token,
    decode_access_token,
    verify_password,
    get_password_hash,
)
from .errors import (
    AppError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)

__all__ = [
    "settings",
    "get_db",
    "engine",
    "SessionLocal",
    "create_access_token",
    "decode_access_token",
    "verify_password",
    "get_password_hash",
    "AppError",
    "AuthenticationError",
    "BadRequestError",
    "ConflictError",
    "NotFoundError",
    "PermissionDeniedError",
]
