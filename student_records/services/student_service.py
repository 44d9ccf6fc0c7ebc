# ================================
# student_records/services/student_service.py
# ================================
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..models import Student
from ..schemas.student import StudentIn

log = logging.getLogger("students")

StudentRecord = Union[StudentIn, Mapping[str, Any]]


def _coerce_student(record: StudentRecord) -> StudentIn:
    if isinstance(record, StudentIn):
        return record
    try:
        return StudentIn.model_validate(dict(record))
    except PydanticValidationError as e:
        details = {
            ".".join(str(x) for x in err["loc"]): err["msg"]
            for err in e.errors()
        }
        raise ValidationError("Invalid student record", details=details) from e


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Student.id).filter(Student.email == email)
    if exclude_id is not None:
        q = q.filter(Student.id != exclude_id)
    return db.query(q.exists()).scalar()


def _commit_or_conflict(db: Session, email: str) -> None:
    # Hai request cùng kiểm tra email song song: unique index quyết định lúc commit
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        log.warning("Email conflict on commit: %s", email)
        raise ConflictError(f"Email '{email}' is already in use.") from e


def create_student(db: Session, record: StudentRecord) -> Student:
    data = _coerce_student(record)
    email = str(data.email)

    if _email_taken(db, email):
        raise ConflictError(f"Email '{email}' is already in use.")

    s = Student(
        first_name=data.first_name,
        last_name=data.last_name,
        email=email,
        date_of_birth=data.date_of_birth,
        enrollment_date=data.enrollment_date,
        is_deleted=False,
    )
    db.add(s)
    _commit_or_conflict(db, email)
    db.refresh(s)
    log.info("Created student id=%s", s.id)
    return s


def get_student(db: Session, student_id: int) -> Student:
    """Tra cứu trực tiếp theo id: trả cả học viên đã xoá mềm."""
    s = db.get(Student, student_id)
    if s is None:
        raise NotFoundError("Student not found")
    return s


def update_student(db: Session, student_id: int, record: StudentRecord) -> Student:
    """Ghi đè toàn bộ trường sửa được. Không đụng tới id / is_deleted."""
    data = _coerce_student(record)
    s = get_student(db, student_id)
    email = str(data.email)

    if email != s.email and _email_taken(db, email, exclude_id=s.id):
        raise ConflictError(f"Email '{email}' is already used by another student.")

    s.first_name = data.first_name
    s.last_name = data.last_name
    s.email = email
    s.date_of_birth = data.date_of_birth
    s.enrollment_date = data.enrollment_date

    _commit_or_conflict(db, email)
    db.refresh(s)
    return s


def deactivate_student(db: Session, student_id: int) -> bool:
    """
    Xoá mềm. Không tồn tại hoặc đã xoá trước đó -> False (không phải lỗi).
    Không có thao tác khôi phục: is_deleted chỉ đi từ False sang True.
    """
    s = db.get(Student, student_id)
    if s is None or s.is_deleted:
        return False

    s.is_deleted = True
    db.commit()
    log.info("Deactivated student id=%s", student_id)
    return True
