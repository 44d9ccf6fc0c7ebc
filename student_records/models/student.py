# student_records/models/student.py
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, false
from sqlalchemy.orm import relationship

from ..db.base import Base


# ================= Student =================
class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    # unique trên toàn bảng, kể cả học viên đã xoá mềm
    email = Column(String(255), unique=True, index=True, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    enrollment_date = Column(Date, nullable=False)

    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    # Không lazy-load: luôn lấy hồ sơ bằng query riêng (application_service).
    # Xoá học viên thì DB tự xoá hồ sơ (ON DELETE CASCADE).
    applications = relationship(
        "Application",
        back_populates="student",
        cascade="all",
        passive_deletes=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email='{self.email}', deleted={self.is_deleted})>"


# ================= Application =================
class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_name = Column(String(255), nullable=False)
    submission_date = Column(Date, nullable=False)

    student = relationship("Student", back_populates="applications", lazy="raise")

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, student_id={self.student_id}, name='{self.application_name}')>"
