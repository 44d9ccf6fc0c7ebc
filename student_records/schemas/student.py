# student_records/schemas/student.py
from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from ..core.config import settings


class _CamelModel(BaseModel):
    # JSON ra/vào dùng camelCase (firstName, dateOfBirth...), Python dùng snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ========= Học viên: dữ liệu vào (tạo mới / cập nhật) =========
class StudentIn(_CamelModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    date_of_birth: date
    enrollment_date: date

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("date_of_birth")
    @classmethod
    def _dob_in_past(cls, v: date) -> date:
        if v >= date.today():
            raise ValueError("Date of birth cannot be in the future.")
        return v

    @field_validator("enrollment_date")
    @classmethod
    def _enrollment_not_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("Enrollment date cannot be in the future.")
        return v


# ========= Học viên: dữ liệu ra =========
class StudentOut(_CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    date_of_birth: date
    enrollment_date: date


class StudentDetailOut(StudentOut):
    # GET theo id trả cả học viên đã xoá mềm -> cho FE biết trạng thái
    is_deleted: bool


# ========= Tìm kiếm / phân trang =========
class StudentQuery(_CamelModel):
    search: str = ""
    sort_by: str = "id"
    sort_direction: str = "asc"
    page: int = 1
    page_size: int = settings.DEFAULT_PAGE_SIZE


class PaginatedStudents(_CamelModel):
    data: List[StudentOut] = Field(default_factory=list)
    total_records: int
    page: int
    page_size: int


# ========= Hồ sơ nộp (Application) =========
class ApplicationIn(_CamelModel):
    application_name: str = Field(min_length=1, max_length=255)
    submission_date: date

    @field_validator("application_name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class ApplicationOut(_CamelModel):
    id: int
    student_id: int
    application_name: str
    submission_date: date


class ImportResultOut(_CamelModel):
    imported: int
    message: str
