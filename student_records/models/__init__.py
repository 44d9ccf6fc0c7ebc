# Aggregator: cho phép "from student_records.models import Student, Application"

from ..db.base import Base

from .student import Student, Application

__all__ = [
    "Base",
    "Student",
    "Application",
]
