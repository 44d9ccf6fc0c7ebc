from datetime import date

import pytest

from student_records.core.errors import ConflictError, NotFoundError, ValidationError
from student_records.schemas.student import StudentIn
from student_records.services import student_service


def _record(**over):
    data = dict(
        first_name="Alice",
        last_name="Smith",
        email="alice@school.edu",
        date_of_birth=date(1995, 5, 10),
        enrollment_date=date(2021, 9, 1),
    )
    data.update(over)
    return StudentIn(**data)


def test_create_then_get_returns_same_record(db):
    rec = _record()
    created = student_service.create_student(db, rec)
    assert created.id is not None

    got = student_service.get_student(db, created.id)
    assert got.first_name == rec.first_name
    assert got.last_name == rec.last_name
    assert got.email == rec.email
    assert got.date_of_birth == rec.date_of_birth
    assert got.enrollment_date == rec.enrollment_date
    assert got.is_deleted is False


def test_create_accepts_camel_case_mapping(db):
    s = student_service.create_student(db, {
        "firstName": "Bob",
        "lastName": "Brown",
        "email": "bob@school.edu",
        "dateOfBirth": "1999-12-31",
        "enrollmentDate": "2020-01-15",
    })
    assert s.first_name == "Bob"
    assert s.date_of_birth == date(1999, 12, 31)


def test_create_rejects_invalid_mapping(db):
    with pytest.raises(ValidationError) as ei:
        student_service.create_student(db, {
            "firstName": "Bob",
            "lastName": "Brown",
            "email": "not-an-email",
            "dateOfBirth": "2999-01-01",
            "enrollmentDate": "2020-01-15",
        })
    assert ei.value.details


def test_create_duplicate_email_conflicts(db):
    student_service.create_student(db, _record())
    with pytest.raises(ConflictError):
        student_service.create_student(db, _record(first_name="Other"))


def test_email_stays_unique_after_deactivation(db, add_student):
    add_student(email="taken@school.edu", is_deleted=True)
    with pytest.raises(ConflictError):
        student_service.create_student(db, _record(email="taken@school.edu"))


def test_get_missing_raises_not_found(db):
    with pytest.raises(NotFoundError):
        student_service.get_student(db, 999)


def test_update_overwrites_fields(db, add_student):
    s = add_student()
    updated = student_service.update_student(db, s.id, _record(email="new@school.edu"))
    assert updated.id == s.id
    assert updated.first_name == "Alice"
    assert updated.email == "new@school.edu"
    assert updated.is_deleted is False


def test_update_keeps_deactivated_flag(db, add_student):
    s = add_student(is_deleted=True)
    updated = student_service.update_student(db, s.id, _record())
    assert updated.is_deleted is True


def test_update_same_email_is_not_a_conflict(db, add_student):
    s = add_student(email="alice@school.edu")
    updated = student_service.update_student(db, s.id, _record(last_name="Jones"))
    assert updated.last_name == "Jones"


def test_update_to_other_students_email_conflicts(db, add_student):
    add_student(email="first@school.edu")
    s = add_student(email="second@school.edu")
    with pytest.raises(ConflictError):
        student_service.update_student(db, s.id, _record(email="first@school.edu"))


def test_update_missing_raises_not_found(db):
    with pytest.raises(NotFoundError):
        student_service.update_student(db, 42, _record())


def test_deactivate_twice_then_get_still_works(db, add_student):
    s = add_student()
    assert student_service.deactivate_student(db, s.id) is True
    assert student_service.deactivate_student(db, s.id) is False

    got = student_service.get_student(db, s.id)
    assert got.is_deleted is True


def test_deactivate_missing_returns_false(db):
    assert student_service.deactivate_student(db, 12345) is False
