"""
Database models for the Registrar backend.

This module contains all SQLAlchemy models for the application:
- Parent and Student models for registrations
- Teacher and SchoolClass models for the class schedule
- Admin model for authentication
"""

from registrar.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .parent import Parent
from .teacher import Teacher
from .school_class import SchoolClass
from .student import Student, RegistrationStatus
from .admin import Admin, AdminRole

# Export all models
__all__ = [
    "Base",
    "Parent",
    "Teacher",
    "SchoolClass",
    "Student",
    "RegistrationStatus",
    "Admin",
    "AdminRole",
]
