# student_records/services/query_service.py
from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import ValidationError
from ..models import Student
from ..schemas.student import PaginatedStudents, StudentOut, StudentQuery
from ..utils.soft_delete import exclude_deleted

# sortBy (không phân biệt hoa thường) -> cột; giá trị khác rơi về id tăng dần
SORT_COLUMNS = {
    "firstname": Student.first_name,
    "lastname": Student.last_name,
    "enrollmentdate": Student.enrollment_date,
}

LIKE_ESCAPE = "\\"

# OFFSET là số nguyên 64-bit có dấu trên mọi engine
MAX_OFFSET = 2**63 - 1


def _like_pattern(text: str) -> str:
    # tìm chuỗi con theo đúng ký tự người dùng gõ, kể cả % và _
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _check_paging(page: int, page_size: int) -> None:
    if page < 1:
        raise ValidationError("page must be >= 1", details={"page": page})
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise ValidationError(
            f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}",
            details={"pageSize": page_size},
        )
    if (page - 1) * page_size > MAX_OFFSET:
        raise ValidationError("page is out of range", details={"page": page})


def search_students(db: Session, query: StudentQuery) -> PaginatedStudents:
    _check_paging(query.page, query.page_size)

    q = exclude_deleted(Student, db.query(Student))

    text = query.search or ""
    if text.strip():
        like = _like_pattern(text)
        q = q.filter(
            or_(
                Student.first_name.ilike(like, escape=LIKE_ESCAPE),
                Student.last_name.ilike(like, escape=LIKE_ESCAPE),
                Student.email.ilike(like, escape=LIKE_ESCAPE),
            )
        )

    column = SORT_COLUMNS.get((query.sort_by or "").lower())
    if column is None:
        q = q.order_by(Student.id.asc())
    elif query.sort_direction == "desc":
        q = q.order_by(column.desc(), Student.id.asc())
    else:
        q = q.order_by(column.asc(), Student.id.asc())

    total = q.order_by(None).count()
    rows = (
        q.offset((query.page - 1) * query.page_size)
        .limit(query.page_size)
        .all()
    )

    return PaginatedStudents(
        data=[StudentOut.model_validate(s) for s in rows],
        total_records=total,
        page=query.page,
        page_size=query.page_size,
    )
