# student_records/services/application_service.py
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from ..models import Application, Student
from ..schemas.student import ApplicationIn
from ..utils.soft_delete import is_active

log = logging.getLogger("students.applications")


def list_applications(db: Session, student_id: int) -> List[Application]:
    """
    Hồ sơ của 1 học viên, kể cả học viên đã xoá mềm.
    Học viên không tồn tại -> [] (khác add_application: không báo lỗi).
    """
    return (
        db.query(Application)
        .filter(Application.student_id == student_id)
        .order_by(Application.id.asc())
        .all()
    )


def add_application(db: Session, student_id: int, record: ApplicationIn) -> bool:
    student = db.get(Student, student_id)
    if not is_active(student):
        log.info("Rejected application for missing/deactivated student id=%s", student_id)
        return False

    db.add(
        Application(
            student_id=student_id,
            application_name=record.application_name,
            submission_date=record.submission_date,
        )
    )
    db.commit()
    return True
