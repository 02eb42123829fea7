"""
Teacher management.
"""

import logging
import uuid
from typing import List

from sqlalchemy.orm import Session

from registrar.core.errors import ConflictError, NotFoundError
from registrar.crud import class_crud, teacher_crud
from registrar.models.teacher import Teacher
from registrar.schemas.teacher import TeacherCreate, TeacherUpdate


logger = logging.getLogger(__name__)


class TeacherService:
    def __init__(self, db: Session):
        self.db = db

    def _check_email_free(self, email: str, exclude_id=None) -> None:
        existing = teacher_crud.get_teacher_by_email(self.db, email)
        if existing and existing.id != exclude_id:
            raise ConflictError("Teacher with this email already exists")

    def get_all_teachers(self) -> List[Teacher]:
        return teacher_crud.get_all_teachers(self.db)

    def get_teacher_by_id(self, teacher_id) -> Teacher:
        teacher = teacher_crud.get_teacher_with_classes(self.db, teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def create_teacher(self, teacher_data: TeacherCreate) -> uuid.UUID:
        self._check_email_free(teacher_data.email)
        try:
            teacher = teacher_crud.create_teacher(self.db, teacher_data.model_dump())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Teacher created: {teacher.id} ({teacher.email})")
        return teacher.id

    def update_teacher(self, teacher_id, teacher_data: TeacherUpdate) -> Teacher:
        teacher = teacher_crud.get_teacher(self.db, teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        self._check_email_free(teacher_data.email, exclude_id=teacher.id)
        try:
            teacher_crud.update_teacher(self.db, teacher, teacher_data.model_dump())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Teacher updated: {teacher_id}")
        return teacher

    def delete_teacher(self, teacher_id) -> None:
        """Delete a teacher; their classes stay on the schedule without a teacher."""
        teacher = teacher_crud.get_teacher(self.db, teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")
        try:
            released = class_crud.unassign_teacher(self.db, teacher_id)
            teacher_crud.delete_teacher(self.db, teacher)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Teacher deleted: {teacher_id} ({released} classes left without a teacher)")
