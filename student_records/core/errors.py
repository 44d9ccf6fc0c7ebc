# student_records/core/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional


class StudentRecordError(Exception):
    """
    Lỗi gốc của tầng nghiệp vụ. Router không bắt từng loại:
    main.py đăng ký 1 handler đọc status_code/code để trả JSON.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(StudentRecordError):
    """Dữ liệu vào sai/ngoài miền giá trị, phát hiện trước khi ghi DB."""

    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(StudentRecordError):
    """Trùng khóa duy nhất (email)."""

    status_code = 409
    code = "CONFLICT"


class NotFoundError(StudentRecordError):
    status_code = 404
    code = "NOT_FOUND"


class UnsupportedFormatError(StudentRecordError):
    """Đuôi file upload không thuộc .csv / .xlsx."""

    status_code = 400
    code = "UNSUPPORTED_FORMAT"


class ParseError(StudentRecordError):
    """File đọc được đuôi nhưng nội dung hỏng (ngày sai, thiếu cột, file lỗi...)."""

    status_code = 400
    code = "PARSE_ERROR"
