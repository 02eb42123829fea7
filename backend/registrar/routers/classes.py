"""
Classes router: the public schedule and its admin management.
"""

import uuid
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.database import get_db
from registrar.routers.deps import get_current_staff
from registrar.schemas.common import ApiResponse
from registrar.schemas.school_class import ClassCreate, ClassCreated, ClassResponse, ClassUpdate
from registrar.services.class_service import ClassService


router = APIRouter()


@router.get("", response_model=ApiResponse[List[ClassResponse]])
def list_classes(
    age: Optional[int] = Query(None, ge=settings.MIN_STUDENT_AGE, le=settings.MAX_STUDENT_AGE),
    available: bool = Query(False, description="Only classes with free places"),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    List classes, optionally only those open to a given age.
    """
    classes = ClassService(db).get_available_classes(age=age, available_only=available)
    return {"success": True, "data": classes}


@router.get("/{class_id}", response_model=ApiResponse[ClassResponse])
def get_class(
    class_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    return {"success": True, "data": ClassService(db).get_class_by_id(class_id)}


@router.post(
    "",
    response_model=ApiResponse[ClassCreated],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_staff)]
)
def create_class(
    class_data: ClassCreate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    class_id = ClassService(db).create_class(class_data)
    return {
        "success": True,
        "message": "Class created successfully",
        "data": {"class_id": class_id},
    }


@router.put(
    "/{class_id}",
    response_model=ApiResponse[ClassResponse],
    dependencies=[Depends(get_current_staff)]
)
def update_class(
    class_id: uuid.UUID,
    class_data: ClassUpdate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Replace a class's schedule, age range, capacity and teacher.
    """
    school_class = ClassService(db).update_class(class_id, class_data)
    return {
        "success": True,
        "message": "Class updated successfully",
        "data": school_class,
    }


@router.delete(
    "/{class_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(get_current_staff)]
)
def delete_class(
    class_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Delete a class that has no students left in it.
    """
    ClassService(db).delete_class(class_id)
    return {"success": True, "message": "Class deleted successfully"}
