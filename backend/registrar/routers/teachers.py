"""
Teachers router.
"""

import uuid
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from registrar.core.database import get_db
from registrar.routers.deps import get_current_staff
from registrar.schemas.common import ApiResponse
from registrar.schemas.teacher import (
    TeacherCreate,
    TeacherCreated,
    TeacherDetail,
    TeacherResponse,
    TeacherUpdate,
)
from registrar.services.teacher_service import TeacherService


router = APIRouter()


@router.get("", response_model=ApiResponse[List[TeacherResponse]])
def list_teachers(db: Session = Depends(get_db)) -> Dict[str, Any]:
    return {"success": True, "data": TeacherService(db).get_all_teachers()}


@router.get("/{teacher_id}", response_model=ApiResponse[TeacherDetail])
def get_teacher(
    teacher_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get a teacher together with the classes they teach.
    """
    return {"success": True, "data": TeacherService(db).get_teacher_by_id(teacher_id)}


@router.post(
    "",
    response_model=ApiResponse[TeacherCreated],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_staff)]
)
def create_teacher(
    teacher_data: TeacherCreate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    teacher_id = TeacherService(db).create_teacher(teacher_data)
    return {
        "success": True,
        "message": "Teacher created successfully",
        "data": {"teacher_id": teacher_id},
    }


@router.put(
    "/{teacher_id}",
    response_model=ApiResponse[TeacherResponse],
    dependencies=[Depends(get_current_staff)]
)
def update_teacher(
    teacher_id: uuid.UUID,
    teacher_data: TeacherUpdate,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    teacher = TeacherService(db).update_teacher(teacher_id, teacher_data)
    return {
        "success": True,
        "message": "Teacher updated successfully",
        "data": teacher,
    }


@router.delete(
    "/{teacher_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(get_current_staff)]
)
def delete_teacher(
    teacher_id: uuid.UUID,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Delete a teacher. Their classes stay on the schedule without a teacher.
    """
    TeacherService(db).delete_teacher(teacher_id)
    return {"success": True, "message": "Teacher deleted successfully"}
