"""
Class schemas.
"""

import re
import uuid
from datetime import datetime, time
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, StringConstraints, field_serializer, field_validator, model_validator

from registrar.core.config import settings
from .common import TeacherSummary


TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")


def parse_clock_time(value, label: str) -> time:
    """Accept ``HH:MM`` (or ``HH:MM:SS``) strings and ``time`` objects."""
    if isinstance(value, time):
        return value
    match = TIME_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Please enter a valid {label} (HH:MM)")
    hours, minutes, seconds = match.groups()
    return time(int(hours), int(minutes), int(seconds or 0))


class ClassCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    start_time: time
    end_time: time
    age_min: int
    age_max: int
    max_students: int
    teacher_id: Optional[uuid.UUID] = None

    @field_validator("start_time", mode="before")
    @classmethod
    def parse_start_time(cls, v):
        return parse_clock_time(v, "start time")

    @field_validator("end_time", mode="before")
    @classmethod
    def parse_end_time(cls, v):
        return parse_clock_time(v, "end time")

    @field_validator("age_min", "age_max")
    @classmethod
    def check_age_bounds(cls, v: int, info) -> int:
        if not settings.MIN_STUDENT_AGE <= v <= settings.MAX_STUDENT_AGE:
            label = "Minimum age" if info.field_name == "age_min" else "Maximum age"
            raise ValueError(
                f"{label} must be between {settings.MIN_STUDENT_AGE} and {settings.MAX_STUDENT_AGE}"
            )
        return v

    @field_validator("max_students")
    @classmethod
    def check_capacity(cls, v: int) -> int:
        if not 1 <= v <= settings.MAX_CLASS_CAPACITY:
            raise ValueError(
                f"Maximum number of students must be between 1 and {settings.MAX_CLASS_CAPACITY}"
            )
        return v

    @model_validator(mode="after")
    def check_ranges(self) -> "ClassCreate":
        if self.age_min > self.age_max:
            raise ValueError("Minimum age cannot be greater than maximum age")
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class ClassUpdate(ClassCreate):
    pass


class ClassCreated(BaseModel):
    class_id: uuid.UUID


class ClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    start_time: time
    end_time: time
    age_min: int
    age_max: int
    teacher_id: Optional[uuid.UUID] = None
    max_students: int
    current_students: int
    available_spots: int
    teacher: Optional[TeacherSummary] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("start_time", "end_time")
    def format_time(self, value: time, _info) -> str:
        return value.strftime("%H:%M")
