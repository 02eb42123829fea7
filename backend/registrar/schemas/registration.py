"""
Registration schemas: the public registration form and the
detailed views administrators review.
"""

import uuid
from datetime import date, datetime
from typing import Annotated, Optional
from pydantic import (
    AfterValidator, BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
)

from registrar.core.config import settings
from registrar.utils.dates import years_before
from .common import ClassSummary, PhoneNumber, TeacherSummary, blank_to_none, normalize_email


PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)]
OptionalName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]
Email = Annotated[EmailStr, AfterValidator(normalize_email)]


class ParentInfo(BaseModel):
    father_first_name: PersonName
    father_last_name: PersonName
    father_phone: PhoneNumber
    father_email: Email
    mother_first_name: Optional[OptionalName] = None
    mother_last_name: Optional[OptionalName] = None
    mother_phone: Optional[PhoneNumber] = None
    mother_email: Optional[Email] = None

    @field_validator(
        "mother_first_name", "mother_last_name", "mother_phone", "mother_email",
        mode="before"
    )
    @classmethod
    def empty_as_missing(cls, v):
        return blank_to_none(v)


class StudentInfo(BaseModel):
    first_name: PersonName
    last_name: PersonName
    date_of_birth: date
    class_id: uuid.UUID

    @field_validator("date_of_birth")
    @classmethod
    def check_program_age(cls, v: date) -> date:
        today = date.today()
        youngest = years_before(today, settings.MIN_STUDENT_AGE)
        oldest = years_before(today, settings.MAX_STUDENT_AGE)
        if v > youngest or v < oldest:
            raise ValueError(
                f"Student must be between {settings.MIN_STUDENT_AGE} "
                f"and {settings.MAX_STUDENT_AGE} years old"
            )
        return v


class RegistrationCreate(BaseModel):
    parent: ParentInfo
    student: StudentInfo


class RegistrationCreated(BaseModel):
    parent_id: uuid.UUID
    student_id: uuid.UUID


class StatusUpdate(BaseModel):
    status: str


class ClassAssignment(BaseModel):
    class_id: Optional[uuid.UUID] = None


class ParentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    father_first_name: str
    father_last_name: str
    father_phone: str
    father_email: str
    mother_first_name: Optional[str] = None
    mother_last_name: Optional[str] = None
    mother_phone: Optional[str] = None
    mother_email: Optional[str] = None


class RegistrationDetail(BaseModel):
    """A student registration with its parent, class and teacher."""
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    parent_id: uuid.UUID
    first_name: str
    last_name: str
    date_of_birth: date
    age: int
    class_id: Optional[uuid.UUID] = None
    registration_status: str
    created_at: datetime
    updated_at: datetime
    parent: ParentResponse
    school_class: Optional[ClassSummary] = Field(default=None, alias="class")
    teacher: Optional[TeacherSummary] = None

    @classmethod
    def from_student(cls, student) -> "RegistrationDetail":
        school_class = student.school_class
        teacher = school_class.teacher if school_class is not None else None
        return cls(
            id=student.id,
            parent_id=student.parent_id,
            first_name=student.first_name,
            last_name=student.last_name,
            date_of_birth=student.date_of_birth,
            age=student.age,
            class_id=student.class_id,
            registration_status=student.registration_status,
            created_at=student.created_at,
            updated_at=student.updated_at,
            parent=ParentResponse.model_validate(student.parent),
            school_class=ClassSummary.model_validate(school_class) if school_class is not None else None,
            teacher=TeacherSummary.model_validate(teacher) if teacher is not None else None,
        )
