"""
Class management.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from registrar.core.errors import BadRequestError, ConflictError, NotFoundError
from registrar.crud import class_crud, teacher_crud
from registrar.models.school_class import SchoolClass
from registrar.schemas.school_class import ClassCreate, ClassUpdate


logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, db: Session):
        self.db = db

    def _check_teacher(self, teacher_id) -> None:
        if teacher_id is not None and not teacher_crud.get_teacher(self.db, teacher_id):
            raise NotFoundError("Teacher not found")

    def get_available_classes(self, age: Optional[int] = None, available_only: bool = False) -> List[SchoolClass]:
        """Classes open to a given age, with their teachers."""
        return class_crud.get_classes(self.db, age=age, available_only=available_only)

    def get_class_by_id(self, class_id) -> SchoolClass:
        school_class = class_crud.get_class_with_teacher(self.db, class_id)
        if not school_class:
            raise NotFoundError("Class not found")
        return school_class

    def create_class(self, class_data: ClassCreate) -> uuid.UUID:
        self._check_teacher(class_data.teacher_id)
        try:
            school_class = class_crud.create_class(self.db, class_data.model_dump())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Class created: {school_class.id} ({school_class.name})")
        return school_class.id

    def update_class(self, class_id, class_data: ClassUpdate) -> SchoolClass:
        school_class = class_crud.get_class(self.db, class_id)
        if not school_class:
            raise NotFoundError("Class not found")
        self._check_teacher(class_data.teacher_id)
        if class_data.max_students < school_class.current_students:
            raise BadRequestError(
                f"Maximum number of students cannot be lower than the "
                f"{school_class.current_students} students already enrolled"
            )
        try:
            class_crud.update_class(self.db, school_class, class_data.model_dump())
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Class updated: {class_id}")
        return school_class

    def delete_class(self, class_id) -> None:
        school_class = class_crud.get_class(self.db, class_id)
        if not school_class:
            raise NotFoundError("Class not found")
        assigned = class_crud.count_students_in_class(self.db, class_id)
        if assigned:
            raise ConflictError(f"Cannot delete class with {assigned} registered students")
        try:
            class_crud.delete_class(self.db, school_class)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Class deleted: {class_id}")
