"""
Registration workflow.

Creates registrations from the public form and applies the admin review
actions (status changes, class reassignment) while keeping each class's
``current_students`` counter in step with its approved students.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.errors import BadRequestError, NotFoundError
from registrar.crud import class_crud, parent_crud, student_crud
from registrar.models.school_class import SchoolClass
from registrar.models.student import RegistrationStatus, Student
from registrar.schemas.registration import RegistrationCreate, RegistrationDetail
from registrar.utils.dates import calculate_age


logger = logging.getLogger(__name__)

VALID_STATUSES = {s.value for s in RegistrationStatus}


class RegistrationService:
    def __init__(self, db: Session):
        self.db = db

    def _get_class_or_404(self, class_id, message: str = "Class not found") -> SchoolClass:
        school_class = class_crud.get_class(self.db, class_id)
        if not school_class:
            raise NotFoundError(message)
        return school_class

    def _get_student_or_404(self, student_id) -> Student:
        student = student_crud.get_student(self.db, student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    @staticmethod
    def _check_eligibility(school_class: SchoolClass, age: int) -> None:
        if not school_class.accepts_age(age):
            raise BadRequestError(f"Student age ({age}) is not appropriate for the class")
        if school_class.is_full:
            raise BadRequestError("Selected class is full")

    def _take_place(self, class_id) -> None:
        if not class_crud.increment_current_students(self.db, class_id):
            raise BadRequestError("Class is full")

    def _release_place(self, class_id) -> None:
        if not class_crud.decrement_current_students(self.db, class_id):
            logger.warning(f"Class {class_id} counter already at zero, nothing to release")

    def create_registration(self, registration: RegistrationCreate) -> Dict[str, uuid.UUID]:
        """
        Register a student into a class on behalf of a parent.

        Looks up the class, checks the student's age and the class capacity,
        then creates (or refreshes) the parent keyed by the father's email and
        inserts the student as a pending registration.

        Args:
            registration: Validated registration form

        Returns:
            Dict[str, uuid.UUID]: The parent and student ids
        """
        parent_data = registration.parent.model_dump()
        student_data = registration.student.model_dump()

        try:
            school_class = self._get_class_or_404(
                student_data["class_id"], "Selected class is not found"
            )
            age = calculate_age(student_data["date_of_birth"])
            self._check_eligibility(school_class, age)

            parent = parent_crud.get_parent_by_father_email(self.db, parent_data["father_email"])
            if parent:
                # Fields left out of the form keep their stored values
                provided = {k: v for k, v in parent_data.items() if v is not None}
                parent = parent_crud.update_parent(self.db, parent, provided)
            else:
                parent = parent_crud.create_parent(self.db, parent_data)

            student = student_crud.create_student(self.db, {
                **student_data,
                "parent_id": parent.id,
                "age": age,
                "registration_status": RegistrationStatus.PENDING.value,
            })
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"New registration created - Student: {student.id}, Parent: {parent.id}")
        return {"parent_id": parent.id, "student_id": student.id}

    def get_registrations(
        self,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
        sort: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
        class_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List registrations with filtering, sorting and pagination.

        Returns:
            Dict[str, Any]: ``data`` rows and ``pagination`` block
        """
        class_filter = None
        if class_id and class_id != "all":
            try:
                class_filter = uuid.UUID(class_id)
            except ValueError:
                raise BadRequestError("Invalid class id", errors={"class_id": "Please select a valid class"})

        students, total = student_crud.get_registrations(
            self.db,
            page=page,
            limit=limit,
            sort=sort,
            search=search.strip() if search else None,
            status=status,
            class_id=class_filter,
        )
        return {
            "data": [RegistrationDetail.from_student(s) for s in students],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": student_crud.page_count(total, limit),
            },
        }

    def get_registration_by_id(self, student_id) -> RegistrationDetail:
        student = student_crud.get_student_with_details(self.db, student_id)
        if not student:
            raise NotFoundError("Registration not found")
        return RegistrationDetail.from_student(student)

    def update_registration_status(self, student_id, status: str) -> None:
        """
        Change the review status of a registration.

        Moving into ``approved`` takes a place in the student's class and
        fails when the class is full; moving out of ``approved`` gives the
        place back.
        """
        if status not in VALID_STATUSES:
            raise BadRequestError("Invalid status, must be pending, approved, or rejected")

        try:
            student = self._get_student_or_404(student_id)
            old_status = student.registration_status

            if student.class_id is not None:
                approved = RegistrationStatus.APPROVED.value
                if status == approved and old_status != approved:
                    self._take_place(student.class_id)
                elif status != approved and old_status == approved:
                    self._release_place(student.class_id)

            student_crud.update_student(self.db, student, {"registration_status": status})
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Registration status updated - Student: {student_id}, Status: {status}")

    def update_registration_class(self, student_id, class_id) -> None:
        """
        Move a student to another class, or out of any class when
        ``class_id`` is None.

        The target class must exist, accept the student's current age and
        have a free place. Approved students carry their place with them:
        the old class is decremented and the new one incremented in the
        same transaction.
        """
        try:
            student = self._get_student_or_404(student_id)
            old_class_id = student.class_id

            if class_id is None:
                if old_class_id is not None and student.is_approved:
                    self._release_place(old_class_id)
                student_crud.update_student(self.db, student, {"class_id": None})
                self.db.commit()
                logger.info(f"Student {student_id} removed from class {old_class_id}")
                return

            if old_class_id == class_id:
                return

            school_class = self._get_class_or_404(class_id)
            age = calculate_age(student.date_of_birth)
            self._check_eligibility(school_class, age)

            if student.is_approved:
                if old_class_id is not None:
                    self._release_place(old_class_id)
                self._take_place(class_id)

            student_crud.update_student(self.db, student, {"class_id": class_id, "age": age})
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Student {student_id} reassigned from class {old_class_id} to {class_id}")
