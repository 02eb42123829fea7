"""
Seed the database with the teaching staff, the class schedule and two
admin accounts.

Usage (from the ``backend`` directory):

    python -m registrar.seed            # create tables, add missing rows
    python -m registrar.seed --reset    # drop everything first
"""

import argparse
import logging
from datetime import time

from sqlalchemy import or_
from sqlalchemy.orm import Session

from registrar.core.config import settings
from registrar.core.database import DatabaseManager, SessionLocal
from registrar.core.security import get_password_hash
from registrar.models import Admin, AdminRole, SchoolClass, Teacher


logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "admin123"

TEACHERS = [
    {
        "name": "Ahmed Mahmoud",
        "email": "ahmed.mahmoud@quranschool.com",
        "phone": "+1234567890",
        "specialization": "Quran Recitation & Tajweed",
    },
    {
        "name": "Fatima Al-Zahra",
        "email": "fatima.zahra@quranschool.com",
        "phone": "+1234567891",
        "specialization": "Arabic Language & Grammar",
    },
    {
        "name": "Omar Said",
        "email": "omar.said@quranschool.com",
        "phone": "+1234567892",
        "specialization": "Islamic Studies & Hadith",
    },
    {
        "name": "Aisha Selma",
        "email": "aisha.selma@quranschool.com",
        "phone": "+1234567893",
        "specialization": "Quran Memorization",
    },
]

# (name, start, end, age_min, age_max, teacher index, max_students)
CLASSES = [
    ("Beginners (5-6 years)", time(9, 0), time(11, 0), 5, 6, 0, 15),
    ("Young Learners Morning (5-7 years)", time(9, 0), time(11, 0), 5, 7, 1, 20),
    ("Young Learners Midday (5-7 years)", time(11, 15), time(13, 15), 5, 7, 0, 20),
    ("Elementary Morning (7-10 years)", time(9, 0), time(11, 0), 7, 10, 2, 25),
    ("Elementary Midday (7-10 years)", time(11, 15), time(13, 15), 7, 10, 1, 25),
    ("Elementary Afternoon (7-10 years)", time(13, 30), time(15, 30), 7, 10, 3, 25),
    ("Intermediate Morning (10-12 years)", time(9, 0), time(11, 0), 10, 12, 0, 20),
    ("Intermediate Afternoon (10-12 years)", time(13, 30), time(15, 30), 10, 12, 2, 20),
    ("Advanced Morning (12-14 years)", time(9, 0), time(11, 0), 12, 14, 1, 18),
    ("Advanced Afternoon (12-14 years)", time(13, 30), time(15, 30), 12, 14, 3, 18),
]


def admin_accounts() -> list:
    """The bootstrap super admin from settings plus one plain admin."""
    return [
        {
            "username": settings.FIRST_ADMIN_USERNAME,
            "email": settings.FIRST_ADMIN_EMAIL.strip().lower(),
            "password": settings.FIRST_ADMIN_PASSWORD,
            "role": AdminRole.SUPER_ADMIN.value,
        },
        {
            "username": "newAdmin",
            "email": "newadmin@quranschool.com",
            "password": DEFAULT_PASSWORD,
            "role": AdminRole.ADMIN.value,
        },
    ]


def seed_teachers(db: Session) -> list:
    teachers = []
    for data in TEACHERS:
        teacher = db.query(Teacher).filter(Teacher.email == data["email"]).first()
        if teacher is None:
            teacher = Teacher(**data)
            db.add(teacher)
            logger.info(f"Teacher added: {data['email']}")
        teachers.append(teacher)
    db.flush()
    return teachers


def seed_classes(db: Session, teachers: list) -> int:
    added = 0
    for name, start, end, age_min, age_max, teacher_index, max_students in CLASSES:
        if db.query(SchoolClass).filter(SchoolClass.name == name).first():
            continue
        db.add(SchoolClass(
            name=name,
            start_time=start,
            end_time=end,
            age_min=age_min,
            age_max=age_max,
            teacher_id=teachers[teacher_index].id,
            max_students=max_students,
        ))
        added += 1
    return added


def seed_admins(db: Session) -> int:
    added = 0
    for data in admin_accounts():
        password = data.pop("password")
        existing = db.query(Admin).filter(
            or_(Admin.email == data["email"], Admin.username == data["username"])
        ).first()
        if existing:
            continue
        db.add(Admin(hashed_password=get_password_hash(password), is_active=True, **data))
        logger.info(f"Admin added: {data['email']}")
        added += 1
    return added


def seed(reset: bool = False) -> None:
    if reset:
        DatabaseManager.drop_all_tables()
    DatabaseManager.create_all_tables()

    with SessionLocal() as db:
        try:
            teachers = seed_teachers(db)
            classes_added = seed_classes(db, teachers)
            admins_added = seed_admins(db)
            db.commit()
        except Exception:
            db.rollback()
            raise

    logger.info(
        f"Database seeded: {len(teachers)} teachers, "
        f"{classes_added} new classes, {admins_added} new admins"
    )
    for table, stats in DatabaseManager.get_table_stats().items():
        logger.info(f"  {table}: {stats['count']} rows")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Registrar database")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="drop and recreate all tables before seeding"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    seed(reset=args.reset)


if __name__ == "__main__":
    main()
