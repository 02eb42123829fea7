"""
Authentication schemas.
"""

import uuid
from datetime import datetime
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator

from .common import normalize_email


class LoginRequest(BaseModel):
    email: Annotated[EmailStr, AfterValidator(normalize_email)]
    password: str

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class AdminResponse(BaseModel):
    """Admin account as exposed by the API (never includes the password hash)."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LoginData(BaseModel):
    admin: AdminResponse
    token: str
    token_type: str = "bearer"


class ProfileUpdate(BaseModel):
    username: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]] = None
    email: Optional[Annotated[EmailStr, AfterValidator(normalize_email)]] = None
