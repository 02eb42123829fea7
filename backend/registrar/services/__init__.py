"""
Service layer: one class per use-case area, each bound to a request's session.
"""

from .auth_service import AuthService
from .class_service import ClassService
from .registration_service import RegistrationService
from .teacher_service import TeacherService

__all__ = ["AuthService", "ClassService", "RegistrationService", "TeacherService"]
