import pytest
from sqlalchemy.exc import IntegrityError

from registrar.models import Parent, Student


def test_deleting_parent_removes_students(client, db_session, school_class, register):
    register(school_class.id)
    parent = db_session.query(Parent).one()

    db_session.delete(parent)
    db_session.commit()

    assert db_session.query(Student).count() == 0


def test_class_counter_cannot_exceed_capacity(db_session, school_class):
    school_class.current_students = school_class.max_students + 1
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_class_helpers(make_class):
    school_class = make_class(max_students=3, current_students=2)
    assert school_class.available_spots == 1
    assert not school_class.is_full
    assert school_class.accepts_age(7)
    assert school_class.accepts_age(10)
    assert not school_class.accepts_age(11)
