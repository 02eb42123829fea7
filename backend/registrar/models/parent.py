"""
Parent model for the Registrar backend.

A parent record holds the father's (required) and mother's (optional)
identity and contact details. The father's email identifies the family.
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from registrar.core.database import Base


class Parent(Base):
    """
    Parent model; owns the students registered by the family.
    """
    __tablename__ = "parents"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Father (required)
    father_first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    father_last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    father_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    father_email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )

    # Mother (optional)
    mother_first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    mother_last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    mother_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    mother_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

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
    students = relationship(
        "Student",
        back_populates="parent",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Parent(id={self.id}, father_email='{self.father_email}')>"
