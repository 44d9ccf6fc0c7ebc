import os
from datetime import date

# DB test: SQLite in-memory, đặt trước khi import app
os.environ["DB_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from student_records.db.session import get_db, init_db, make_engine
from student_records.main import app
from student_records.models import Application, Student


@pytest.fixture()
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client(session_factory):
    def _override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def add_student(db):
    """Ghi thẳng 1 học viên vào DB (cho phép tạo sẵn học viên đã xoá mềm)."""
    counter = {"n": 0}

    def _add(first_name="John", last_name="Doe", email=None, is_deleted=False,
             date_of_birth=date(2000, 1, 1), enrollment_date=date(2020, 9, 1)):
        counter["n"] += 1
        s = Student(
            first_name=first_name,
            last_name=last_name,
            email=email or f"student{counter['n']}@school.edu",
            date_of_birth=date_of_birth,
            enrollment_date=enrollment_date,
            is_deleted=is_deleted,
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        return s

    return _add


@pytest.fixture()
def seed_application(db):
    def _add(student_id, name="Internship", submitted=date(2024, 3, 1)):
        a = Application(student_id=student_id, application_name=name, submission_date=submitted)
        db.add(a)
        db.commit()
        db.refresh(a)
        return a

    return _add
