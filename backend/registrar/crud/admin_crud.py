from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from registrar.models.admin import Admin


def get_admin(db: Session, admin_id) -> Optional[Admin]:
    return db.get(Admin, admin_id)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    stmt = select(Admin).where(Admin.email == email)
    return db.execute(stmt).scalars().first()


def get_admin_by_username(db: Session, username: str) -> Optional[Admin]:
    stmt = select(Admin).where(Admin.username == username)
    return db.execute(stmt).scalars().first()


def update_admin(db: Session, db_admin: Admin, admin_data: Dict[str, Any]) -> Admin:
    for key, value in admin_data.items():
        setattr(db_admin, key, value)
    db.add(db_admin)
    db.flush()
    return db_admin
