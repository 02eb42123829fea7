from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from registrar.models.teacher import Teacher


def get_teacher(db: Session, teacher_id) -> Optional[Teacher]:
    return db.get(Teacher, teacher_id)


def get_teacher_with_classes(db: Session, teacher_id) -> Optional[Teacher]:
    stmt = (
        select(Teacher)
        .options(selectinload(Teacher.classes))
        .where(Teacher.id == teacher_id)
    )
    return db.execute(stmt).scalars().first()


def get_teacher_by_email(db: Session, email: str) -> Optional[Teacher]:
    stmt = select(Teacher).where(Teacher.email == email)
    return db.execute(stmt).scalars().first()


def get_all_teachers(db: Session) -> List[Teacher]:
    stmt = select(Teacher).order_by(Teacher.name)
    return list(db.execute(stmt).scalars().all())


def create_teacher(db: Session, teacher_data: Dict[str, Any]) -> Teacher:
    db_teacher = Teacher(**teacher_data)
    db.add(db_teacher)
    db.flush()
    return db_teacher


def update_teacher(db: Session, db_teacher: Teacher, teacher_data: Dict[str, Any]) -> Teacher:
    for key, value in teacher_data.items():
        setattr(db_teacher, key, value)
    db.add(db_teacher)
    db.flush()
    return db_teacher


def delete_teacher(db: Session, db_teacher: Teacher) -> None:
    db.delete(db_teacher)
    db.flush()
