"""
Registrations router.

The registration form is public; reviewing, listing and reassigning
registrations is restricted to admins.
"""

import uuid
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.database import get_db
from registrar.routers.deps import get_current_staff
from registrar.schemas.common import ApiResponse, PaginatedResponse
from registrar.schemas.registration import (
    ClassAssignment,
    RegistrationCreate,
    RegistrationCreated,
    RegistrationDetail,
    StatusUpdate,
)
from registrar.services.registration_service import RegistrationService


router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[RegistrationCreated],
    status_code=status.HTTP_201_CREATED
)
def create_registration(
    registration: RegistrationCreate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Register a student into a class.
    """
    result = RegistrationService(db).create_registration(registration)
    return {
        "success": True,
        "message": "Registration created successfully",
        "data": result,
    }


@router.get(
    "",
    response_model=PaginatedResponse[RegistrationDetail],
    dependencies=[Depends(get_current_staff)]
)
def list_registrations(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort: str = Query("-created_at"),
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    class_id: Optional[str] = None,
    class_id_camel: Optional[str] = Query(None, alias="classId", include_in_schema=False),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    List registrations with filtering, sorting and pagination.
    """
    result = RegistrationService(db).get_registrations(
        page=page,
        limit=limit,
        sort=sort,
        search=search,
        status=status_filter,
        class_id=class_id or class_id_camel,
    )
    return {"success": True, **result}


@router.get(
    "/{student_id}",
    response_model=ApiResponse[RegistrationDetail],
    dependencies=[Depends(get_current_staff)]
)
def get_registration(
    student_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    registration = RegistrationService(db).get_registration_by_id(student_id)
    return {"success": True, "data": registration}


@router.patch(
    "/{student_id}/status",
    response_model=ApiResponse[None],
    dependencies=[Depends(get_current_staff)]
)
def update_registration_status(
    student_id: uuid.UUID,
    body: StatusUpdate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Approve, reject or reset a registration.
    """
    RegistrationService(db).update_registration_status(student_id, body.status)
    return {"success": True, "message": f"Registration {body.status} successfully"}


@router.patch(
    "/{student_id}/class",
    response_model=ApiResponse[None],
    dependencies=[Depends(get_current_staff)]
)
def update_registration_class(
    student_id: uuid.UUID,
    body: ClassAssignment,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Move a student to another class, or remove the class with ``null``.
    """
    RegistrationService(db).update_registration_class(student_id, body.class_id)
    return {"success": True, "message": "Class assignment updated successfully"}
