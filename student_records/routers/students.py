# student_records/routers/students.py
from __future__ import annotations

import io
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session
from starlette.responses import StreamingResponse

from ..core.config import settings
from ..core.errors import StudentRecordError
from ..db.session import get_db
from ..schemas.student import (
    ApplicationIn,
    ApplicationOut,
    ImportResultOut,
    PaginatedStudents,
    StudentDetailOut,
    StudentIn,
    StudentOut,
    StudentQuery,
)
from ..services import (
    application_service,
    export_service,
    import_service,
    query_service,
    student_service,
)

router = APIRouter(prefix="/students", tags=["Students"])

REPORT_MEDIA = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


# ================= LIST / SEARCH =================
@router.get("", response_model=PaginatedStudents)
@router.get("/", response_model=PaginatedStudents, include_in_schema=False)
def list_students(
    search: str = Query("", description="Để trống = lấy tất cả"),
    sort_by: str = Query("id", alias="sortBy"),
    sort_direction: str = Query("asc", alias="sortDirection"),
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    db: Session = Depends(get_db),
):
    q = StudentQuery(
        search=search,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        page_size=page_size,
    )
    return query_service.search_students(db, q)


# ================= REPORT =================
# khai báo trước "/{student_id}" để "report" không bị hiểu là id
@router.get("/report/download")
def download_report(
    fmt: str = Query("csv", alias="format", pattern="^(csv|xlsx)$"),
    db: Session = Depends(get_db),
):
    if fmt == "xlsx":
        data = export_service.generate_report_xlsx(db)
    else:
        data = export_service.generate_report(db)
    if data is None:
        raise HTTPException(404, "No student records available for download.")

    filename = f"{settings.REPORT_FILENAME}.{fmt}"
    return StreamingResponse(
        io.BytesIO(data),
        media_type=REPORT_MEDIA[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ================= BULK UPLOAD =================
@router.post("/upload", response_model=ImportResultOut)
def bulk_upload(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    data = file.file.read()
    try:
        n = import_service.bulk_import(db, data, file.filename or "")
    except StudentRecordError as e:
        # upload: mọi lỗi nghiệp vụ (kể cả trùng email) -> 400
        raise HTTPException(status.HTTP_400_BAD_REQUEST, {"error": e.message, "code": e.code}) from e

    if n == 0:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "No students were added.")
    return ImportResultOut(imported=n, message="Students uploaded successfully!")


# ================= GET by id =================
@router.get("/{student_id}", response_model=StudentDetailOut)
def get_student(student_id: int, db: Session = Depends(get_db)):
    return student_service.get_student(db, student_id)


# ================= CREATE =================
@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=StudentOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_student(payload: StudentIn, db: Session = Depends(get_db)):
    return student_service.create_student(db, payload)


# ================= UPDATE =================
@router.put("/{student_id}")
def update_student(student_id: int, payload: StudentIn, db: Session = Depends(get_db)):
    s = student_service.update_student(db, student_id, payload)
    return {"ok": True, "id": s.id}


# ================= DEACTIVATE (SOFT-DELETE) =================
@router.delete("/{student_id}")
def deactivate_student(student_id: int, db: Session = Depends(get_db)):
    if not student_service.deactivate_student(db, student_id):
        raise HTTPException(404, "Student not found")
    return {"ok": True, "message": "Student account deactivated successfully"}


# ================= APPLICATIONS =================
@router.get("/{student_id}/applications", response_model=List[ApplicationOut])
def get_applications(student_id: int, db: Session = Depends(get_db)):
    return application_service.list_applications(db, student_id)


@router.post("/{student_id}/applications")
def add_application(student_id: int, payload: ApplicationIn, db: Session = Depends(get_db)):
    if not application_service.add_application(db, student_id, payload):
        raise HTTPException(404, "Student not found")
    return {"ok": True, "message": "Application added successfully!"}
