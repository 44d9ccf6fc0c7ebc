# ================================
# file: student_records/routers/health.py
# ================================
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.config import settings
from ..db.session import get_db
from ..models import Student
from ..utils.soft_delete import exclude_deleted

router = APIRouter()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    # chạm DB thật: lỗi kết nối -> 500 qua global handler
    active = exclude_deleted(Student, db.query(Student)).count()
    return {
        "ok": True,
        "env": settings.APP_ENV,
        "activeStudents": active,
        "time": datetime.now(timezone.utc).isoformat(),
    }
