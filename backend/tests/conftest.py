import os

# Settings are read at import time
os.environ["TESTING"] = "True"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from registrar.core.database import Base, get_db
from registrar.core.security import create_access_token, get_password_hash
from registrar.main import app
from registrar.models import Admin, AdminRole, SchoolClass, Teacher
from registrar.services.auth_service import token_claims
from registrar.utils.dates import years_before


ADMIN_PASSWORD = "secret123"

# SQLite in-memory database shared by every session
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def teacher(db_session):
    teacher = Teacher(
        name="Fatima Al-Zahra",
        email="fatima@example.com",
        phone="+1234567891",
        specialization="Arabic Language",
    )
    db_session.add(teacher)
    db_session.commit()
    return teacher


@pytest.fixture
def make_class(db_session, teacher):
    def _make_class(**overrides):
        values = {
            "name": "Elementary Morning",
            "start_time": time(9, 0),
            "end_time": time(11, 0),
            "age_min": 7,
            "age_max": 10,
            "teacher_id": teacher.id,
            "max_students": 20,
        }
        values.update(overrides)
        school_class = SchoolClass(**values)
        db_session.add(school_class)
        db_session.commit()
        return school_class

    return _make_class


@pytest.fixture
def school_class(make_class):
    return make_class()


@pytest.fixture
def make_admin(db_session):
    def _make_admin(email="admin@example.com", username="admin", role=AdminRole.SUPER_ADMIN.value, **extra):
        admin = Admin(
            email=email,
            username=username,
            hashed_password=get_password_hash(ADMIN_PASSWORD),
            role=role,
            **extra,
        )
        db_session.add(admin)
        db_session.commit()
        return admin

    return _make_admin


@pytest.fixture
def admin(make_admin):
    return make_admin()


@pytest.fixture
def auth_headers(admin):
    token = create_access_token(subject=str(admin.id), additional_claims=token_claims(admin))
    return {"Authorization": f"Bearer {token}"}


def birth_date(age: int) -> date:
    """A date of birth for a child who turned ``age`` today."""
    return years_before(date.today(), age)


def registration_payload(class_id, age: int = 8, father_email: str = "youssef@example.com", **student):
    payload = {
        "parent": {
            "father_first_name": "Youssef",
            "father_last_name": "Haddad",
            "father_phone": "+1987654321",
            "father_email": father_email,
            "mother_first_name": "Mariam",
            "mother_last_name": "Haddad",
            "mother_phone": "",
            "mother_email": "",
        },
        "student": {
            "first_name": "Adam",
            "last_name": "Haddad",
            "date_of_birth": birth_date(age).isoformat(),
            "class_id": str(class_id),
        },
    }
    payload["student"].update(student)
    return payload


@pytest.fixture
def register(client):
    """Submit the public registration form and return the new student id."""
    def _register(class_id, **kwargs):
        response = client.post("/api/registrations", json=registration_payload(class_id, **kwargs))
        assert response.status_code == 201, response.json()
        return response.json()["data"]["student_id"]

    return _register
