"""
Student model for the Registrar backend.

A student row is the registration itself: it carries the registration
status reviewed by administrators and the class the student is assigned to.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional
from sqlalchemy import Integer, String, Date, DateTime, Uuid, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from registrar.core.database import Base


class RegistrationStatus(str, Enum):
    """Review states of a registration."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Student(Base):
    """
    Student model; deleted together with its parent.
    """
    __tablename__ = "students"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    parent_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("parents.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Identity
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    class_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("classes.id"),
        nullable=True,
        index=True
    )

    registration_status: Mapped[str] = mapped_column(
        String(20),
        default=RegistrationStatus.PENDING.value,
        nullable=False
    )

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
    parent = relationship("Parent", back_populates="students")
    school_class = relationship("SchoolClass", back_populates="students")

    __table_args__ = (
        Index("idx_students_status", "registration_status"),
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name='{self.first_name} {self.last_name}', status='{self.registration_status}')>"

    @property
    def is_approved(self) -> bool:
        return self.registration_status == RegistrationStatus.APPROVED.value
