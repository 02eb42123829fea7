import math
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, contains_eager, joinedload

from registrar.models.parent import Parent
from registrar.models.school_class import SchoolClass
from registrar.models.student import Student


# Accepted sort keys, camelCase spellings included for older clients
SORT_COLUMNS = {
    "created_at": Student.created_at,
    "createdAt": Student.created_at,
    "first_name": Student.first_name,
    "firstName": Student.first_name,
    "last_name": Student.last_name,
    "lastName": Student.last_name,
}
DEFAULT_SORT = "-created_at"


def get_student(db: Session, student_id) -> Optional[Student]:
    return db.get(Student, student_id)


def get_student_with_details(db: Session, student_id) -> Optional[Student]:
    stmt = (
        select(Student)
        .options(
            joinedload(Student.parent),
            joinedload(Student.school_class).joinedload(SchoolClass.teacher),
        )
        .where(Student.id == student_id)
    )
    return db.execute(stmt).scalars().first()


def create_student(db: Session, student_data: Dict[str, Any]) -> Student:
    db_student = Student(**student_data)
    db.add(db_student)
    db.flush()
    return db_student


def update_student(db: Session, db_student: Student, student_data: Dict[str, Any]) -> Student:
    for key, value in student_data.items():
        setattr(db_student, key, value)
    db.add(db_student)
    db.flush()
    return db_student


def escape_like(value: str) -> str:
    """Make ``%`` and ``_`` in user input match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_registration_filters(
    search: Optional[str] = None,
    status: Optional[str] = None,
    class_id=None,
) -> list:
    """
    Translate list filters into SQL conditions.

    Empty values and ``"all"`` mean no filter.
    """
    conditions = []
    if status and status != "all":
        conditions.append(Student.registration_status == status)
    if class_id and class_id != "all":
        conditions.append(Student.class_id == class_id)
    if search:
        term = f"%{escape_like(search)}%"
        conditions.append(
            or_(
                Student.first_name.ilike(term, escape="\\"),
                Student.last_name.ilike(term, escape="\\"),
                Parent.father_first_name.ilike(term, escape="\\"),
                Parent.father_last_name.ilike(term, escape="\\"),
                Parent.father_email.ilike(term, escape="\\"),
            )
        )
    return conditions


def resolve_sort(sort: Optional[str]):
    """
    Map ``field`` / ``-field`` to an ORDER BY clause.

    Unknown fields fall back to newest first.
    """
    sort = sort or DEFAULT_SORT
    descending = sort.startswith("-")
    column = SORT_COLUMNS.get(sort.lstrip("-"))
    if column is None:
        return Student.created_at.desc()
    return column.desc() if descending else column.asc()


def count_registrations(db: Session, conditions: list) -> int:
    stmt = (
        select(func.count())
        .select_from(Student)
        .join(Parent, Student.parent_id == Parent.id)
        .where(*conditions)
    )
    return db.execute(stmt).scalar_one()


def get_registrations(
    db: Session,
    page: int = 1,
    limit: int = 10,
    sort: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    class_id=None,
) -> Tuple[List[Student], int]:
    """
    One page of registrations with parent, class and teacher loaded.

    Returns:
        Tuple[List[Student], int]: The page and the total number of matches
    """
    conditions = build_registration_filters(search=search, status=status, class_id=class_id)
    total = count_registrations(db, conditions)

    stmt = (
        select(Student)
        .join(Parent, Student.parent_id == Parent.id)
        .options(
            contains_eager(Student.parent),
            joinedload(Student.school_class).joinedload(SchoolClass.teacher),
        )
        .where(*conditions)
        .order_by(resolve_sort(sort), Student.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    students = list(db.execute(stmt).unique().scalars().all())
    return students, total


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
