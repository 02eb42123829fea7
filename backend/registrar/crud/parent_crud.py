from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.models.parent import Parent


def get_parent_by_father_email(db: Session, father_email: str) -> Optional[Parent]:
    stmt = select(Parent).where(Parent.father_email == father_email)
    return db.execute(stmt).scalars().first()


def create_parent(db: Session, parent_data: Dict[str, Any]) -> Parent:
    db_parent = Parent(**parent_data)
    db.add(db_parent)
    db.flush()
    return db_parent


def update_parent(db: Session, db_parent: Parent, parent_data: Dict[str, Any]) -> Parent:
    for key, value in parent_data.items():
        setattr(db_parent, key, value)
    db.add(db_parent)
    db.flush()
    return db_parent
