# student_records/utils/soft_delete.py
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Query


def exclude_deleted(model: Any, query: Query) -> Query:
    """
    Dùng chuẩn:  exclude_deleted(Student, query)

    Trả về query đã thêm filter loại bỏ bản ghi đã xoá mềm (is_deleted = FALSE).
    Model không có cột is_deleted -> trả nguyên query.
    """
    if not isinstance(query, Query):
        raise TypeError("exclude_deleted expects SQLAlchemy Query")
    if not hasattr(model, "is_deleted"):
        return query
    return query.filter(model.is_deleted.is_(False))


def is_active(obj: Any) -> bool:
    """True nếu bản ghi tồn tại và chưa bị xoá mềm."""
    if obj is None:
        return False
    return not bool(getattr(obj, "is_deleted", False))
