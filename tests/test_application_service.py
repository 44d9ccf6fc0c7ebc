from datetime import date

from sqlalchemy import delete

from student_records.models import Application, Student
from student_records.schemas.student import ApplicationIn
from student_records.services.application_service import add_application, list_applications


def _app(name="Internship"):
    return ApplicationIn(application_name=name, submission_date=date(2024, 3, 1))


def test_add_then_list(db, add_student):
    s = add_student()
    assert add_application(db, s.id, _app("Internship")) is True
    assert add_application(db, s.id, _app("Scholarship")) is True

    apps = list_applications(db, s.id)
    assert [a.application_name for a in apps] == ["Internship", "Scholarship"]
    assert all(a.student_id == s.id for a in apps)


def test_add_to_deactivated_student_fails_without_writing(db, add_student):
    s = add_student(is_deleted=True)
    assert add_application(db, s.id, _app()) is False
    assert db.query(Application).count() == 0


def test_missing_student_add_fails_but_list_is_empty(db):
    assert add_application(db, 999, _app()) is False
    assert list_applications(db, 999) == []


def test_list_keeps_history_of_deactivated_student(db, add_student, seed_application):
    s = add_student()
    seed_application(s.id, "Exchange")
    s.is_deleted = True
    db.commit()

    assert [a.application_name for a in list_applications(db, s.id)] == ["Exchange"]


def test_list_is_scoped_to_student(db, add_student, seed_application):
    a = add_student()
    b = add_student()
    seed_application(a.id, "A1")
    seed_application(b.id, "B1")

    assert [x.application_name for x in list_applications(db, b.id)] == ["B1"]


def test_removing_student_cascades_to_applications(db, add_student, seed_application):
    s = add_student()
    seed_application(s.id)

    db.execute(delete(Student).where(Student.id == s.id))
    db.commit()

    assert db.query(Application).count() == 0
