"""
Request and response schemas for the Registrar API.
"""

from .common import ApiResponse, PaginatedResponse, Pagination, ClassSummary, TeacherSummary
from .auth import LoginRequest, LoginData, AdminResponse, ProfileUpdate
from .registration import (
    RegistrationCreate,
    RegistrationCreated,
    RegistrationDetail,
    StatusUpdate,
    ClassAssignment,
)
from .school_class import ClassCreate, ClassUpdate, ClassCreated, ClassResponse
from .teacher import TeacherCreate, TeacherUpdate, TeacherCreated, TeacherResponse, TeacherDetail

__all__ = [
    "ApiResponse",
    "PaginatedResponse",
    "Pagination",
    "ClassSummary",
    "TeacherSummary",
    "LoginRequest",
    "LoginData",
    "AdminResponse",
    "ProfileUpdate",
    "RegistrationCreate",
    "RegistrationCreated",
    "RegistrationDetail",
    "StatusUpdate",
    "ClassAssignment",
    "ClassCreate",
    "ClassUpdate",
    "ClassCreated",
    "ClassResponse",
    "TeacherCreate",
    "TeacherUpdate",
    "TeacherCreated",
    "TeacherResponse",
    "TeacherDetail",
]
