"""
Class model for the Registrar backend.

A class is a weekly time slot for one age bracket. ``current_students``
counts the approved registrations assigned to the class and is maintained
by the registration workflow, never written directly by the class CRUD.
"""

import uuid
from datetime import datetime, time
from typing import Optional
from sqlalchemy import (
    Integer, String, DateTime, Time, Uuid, ForeignKey, Index, CheckConstraint
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from registrar.core.database import Base


DEFAULT_MAX_STUDENTS = 20


class SchoolClass(Base):
    """
    Age-bracketed class with a capacity and a live enrollment counter.
    """
    __tablename__ = "classes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Time window
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    # Inclusive age range
    age_min: Mapped[int] = mapped_column(Integer, nullable=False)
    age_max: Mapped[int] = mapped_column(Integer, nullable=False)

    teacher_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("teachers.id"),
        nullable=True,
        index=True
    )

    # Capacity
    max_students: Mapped[int] = mapped_column(Integer, default=DEFAULT_MAX_STUDENTS, nullable=False)
    current_students: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Relationships
    teacher = relationship("Teacher", back_populates="classes")
    students = relationship("Student", back_populates="school_class")

    # Table constraints
    __table_args__ = (
        CheckConstraint("current_students >= 0", name="check_current_students_positive"),
        CheckConstraint("current_students <= max_students", name="check_capacity"),
        CheckConstraint("age_min <= age_max", name="check_age_range"),
        Index("idx_classes_age_range", "age_min", "age_max"),
    )

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name='{self.name}', {self.current_students}/{self.max_students})>"

    @property
    def available_spots(self) -> int:
        return max(self.max_students - self.current_students, 0)

    @property
    def is_full(self) -> bool:
        return self.current_students >= self.max_students

    def accepts_age(self, age: int) -> bool:
        """Check if a student of this age may join the class."""
        return self.age_min <= age <= self.age_max
