"""
Teacher schemas.
"""

import uuid
from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator

from .common import ClassSummary, PhoneNumber, blank_to_none, normalize_email


class TeacherCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    email: Annotated[EmailStr, AfterValidator(normalize_email)]
    phone: PhoneNumber
    specialization: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]] = None

    @field_validator("specialization", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class TeacherUpdate(TeacherCreate):
    pass


class TeacherCreated(BaseModel):
    teacher_id: uuid.UUID


class TeacherResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str
    specialization: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TeacherDetail(TeacherResponse):
    classes: List[ClassSummary] = []
