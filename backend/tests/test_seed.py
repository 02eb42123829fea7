import pytest

from registrar.core.config import settings
from registrar.core.database import DatabaseManager, SessionLocal, init_db
from registrar.core.security import verify_password
from registrar.models import Admin, SchoolClass, Teacher
from registrar.seed import seed


@pytest.fixture
def fresh_database():
    DatabaseManager.drop_all_tables()
    DatabaseManager.create_all_tables()
    yield
    DatabaseManager.drop_all_tables()


def admin_emails():
    with SessionLocal() as db:
        return sorted(a.email for a in db.query(Admin).all())


def test_seed_is_repeatable(fresh_database):
    seed(reset=True)
    seed()

    with SessionLocal() as db:
        assert db.query(Teacher).count() == 4
        assert db.query(SchoolClass).count() == 10
        assert {a.role for a in db.query(Admin).all()} == {"super_admin", "admin"}
        assert all(c.teacher_id is not None for c in db.query(SchoolClass).all())


def test_init_db_creates_first_admin(fresh_database):
    with SessionLocal() as db:
        init_db(db)
        init_db(db)

        admins = db.query(Admin).all()
        assert len(admins) == 1
        assert admins[0].email == settings.FIRST_ADMIN_EMAIL
        assert admins[0].role == "super_admin"
        assert verify_password(settings.FIRST_ADMIN_PASSWORD, admins[0].hashed_password)


def test_startup_after_seed(fresh_database):
    seed()
    with SessionLocal() as db:
        init_db(db)

    assert admin_emails() == sorted([settings.FIRST_ADMIN_EMAIL, "newadmin@quranschool.com"])


def test_seed_after_startup(fresh_database):
    with SessionLocal() as db:
        init_db(db)
    seed()

    assert admin_emails() == sorted([settings.FIRST_ADMIN_EMAIL, "newadmin@quranschool.com"])
    with SessionLocal() as db:
        super_admin = db.query(Admin).filter(Admin.role == "super_admin").one()
        assert super_admin.username == settings.FIRST_ADMIN_USERNAME


def test_init_db_skips_taken_username(fresh_database):
    with SessionLocal() as db:
        db.add(Admin(
            email="someone@example.com",
            username=settings.FIRST_ADMIN_USERNAME,
            hashed_password="x",
        ))
        db.commit()

        init_db(db)

    assert admin_emails() == ["someone@example.com"]
