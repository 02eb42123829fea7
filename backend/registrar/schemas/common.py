"""
Shared schemas: response envelope, pagination, reusable field types
and the compact teacher/class views nested in other responses.
"""

import re
import uuid
from datetime import time
from typing import Annotated, Generic, List, Optional, TypeVar
from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints, field_serializer


T = TypeVar("T")

PHONE_PATTERN = re.compile(r"^[+]?[1-9]\d{0,15}$")


def validate_phone(value: str) -> str:
    if not PHONE_PATTERN.match(value):
        raise ValueError("Please enter a valid phone number")
    return value


def normalize_email(value: str) -> str:
    return value.strip().lower()


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


PhoneNumber = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    AfterValidator(validate_phone),
]


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope returned by every endpoint."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: Pagination


class TeacherSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str
    specialization: Optional[str] = None


class ClassSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    start_time: time
    end_time: time
    age_min: int
    age_max: int
    max_students: int
    current_students: int

    @field_serializer("start_time", "end_time")
    def format_time(self, value: time, _info) -> str:
        return value.strftime("%H:%M")
