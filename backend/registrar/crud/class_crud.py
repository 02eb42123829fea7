from typing import Any, Dict, List, Optional
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload

from registrar.models.school_class import SchoolClass
from registrar.models.student import Student


def get_class(db: Session, class_id) -> Optional[SchoolClass]:
    return db.get(SchoolClass, class_id)


def get_class_with_teacher(db: Session, class_id) -> Optional[SchoolClass]:
    stmt = (
        select(SchoolClass)
        .options(joinedload(SchoolClass.teacher))
        .where(SchoolClass.id == class_id)
    )
    return db.execute(stmt).scalars().first()


def get_classes(db: Session, age: Optional[int] = None, available_only: bool = False) -> List[SchoolClass]:
    """
    Classes with their teacher, optionally restricted to one age
    and to classes that still have free places.
    """
    stmt = select(SchoolClass).options(joinedload(SchoolClass.teacher))
    if age is not None:
        stmt = stmt.where(SchoolClass.age_min <= age, SchoolClass.age_max >= age)
    if available_only:
        stmt = stmt.where(SchoolClass.current_students < SchoolClass.max_students)
    stmt = stmt.order_by(SchoolClass.start_time, SchoolClass.name)
    return list(db.execute(stmt).scalars().all())


def create_class(db: Session, class_data: Dict[str, Any]) -> SchoolClass:
    db_class = SchoolClass(**class_data)
    db.add(db_class)
    db.flush()
    return db_class


def update_class(db: Session, db_class: SchoolClass, class_data: Dict[str, Any]) -> SchoolClass:
    for key, value in class_data.items():
        setattr(db_class, key, value)
    db.add(db_class)
    db.flush()
    return db_class


def delete_class(db: Session, db_class: SchoolClass) -> None:
    db.delete(db_class)
    db.flush()


def count_students_in_class(db: Session, class_id) -> int:
    stmt = select(func.count()).select_from(Student).where(Student.class_id == class_id)
    return db.execute(stmt).scalar_one()


def unassign_teacher(db: Session, teacher_id) -> int:
    """Detach a teacher from every class they lead. Returns the number of classes."""
    stmt = (
        update(SchoolClass)
        .where(SchoolClass.teacher_id == teacher_id)
        .values(teacher_id=None)
        .execution_options(synchronize_session="fetch")
    )
    return db.execute(stmt).rowcount


def increment_current_students(db: Session, class_id) -> bool:
    """
    Take one place in a class.

    The capacity check and the increment are a single guarded UPDATE, so
    two concurrent approvals cannot both take the last place.

    Returns:
        bool: False when the class is missing or already full
    """
    stmt = (
        update(SchoolClass)
        .where(
            SchoolClass.id == class_id,
            SchoolClass.current_students < SchoolClass.max_students
        )
        .values(current_students=SchoolClass.current_students + 1)
        .execution_options(synchronize_session="fetch")
    )
    return db.execute(stmt).rowcount == 1


def decrement_current_students(db: Session, class_id) -> bool:
    """
    Release one place in a class; never goes below zero.

    Returns:
        bool: False when the class is missing or the counter is already zero
    """
    stmt = (
        update(SchoolClass)
        .where(
            SchoolClass.id == class_id,
            SchoolClass.current_students > 0
        )
        .values(current_students=SchoolClass.current_students - 1)
        .execution_options(synchronize_session="fetch")
    )
    return db.execute(stmt).rowcount == 1
