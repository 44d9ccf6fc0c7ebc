# ================================
# student_records/services/export_service.py
# ================================
from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment
from sqlalchemy.orm import Session

from ..models import Student
from ..utils.dates import fmt_date_iso
from ..utils.soft_delete import exclude_deleted

REPORT_HEADERS = ["Id", "FirstName", "LastName", "Email", "DateOfBirth", "EnrollmentDate"]


# ---------- Helper ----------
def _active_students(db: Session) -> List[Student]:
    q = exclude_deleted(Student, db.query(Student))
    return q.order_by(Student.id.asc()).all()


def _autosize(ws):
    ws.freeze_panes = "A2"
    for col in ws.columns:
        w = max(10, *(len(str(c.value)) if c.value else 0 for c in col)) + 2
        ws.column_dimensions[col[0].column_letter].width = min(w, 40)


# ---------- Report CSV ----------
def generate_report(db: Session) -> Optional[bytes]:
    """CSV học viên đang hoạt động; None nếu không có ai."""
    students = _active_students(db)
    if not students:
        return None

    df = pd.DataFrame(
        [
            [
                s.id,
                s.first_name,
                s.last_name,
                s.email,
                fmt_date_iso(s.date_of_birth),
                fmt_date_iso(s.enrollment_date),
            ]
            for s in students
        ],
        columns=REPORT_HEADERS,
    )
    return df.to_csv(index=False, lineterminator="\n").encode("utf-8")


# ---------- Report Excel ----------
def generate_report_xlsx(db: Session) -> Optional[bytes]:
    students = _active_students(db)
    if not students:
        return None

    wb = Workbook()
    ws = wb.active
    ws.title = "Students"
    ws.append(REPORT_HEADERS)

    for s in students:
        ws.append([
            s.id,
            s.first_name,
            s.last_name,
            s.email,
            s.date_of_birth,
            s.enrollment_date,
        ])

    # format cột ngày (5: DateOfBirth, 6: EnrollmentDate)
    for col in (5, 6):
        for cells in ws.iter_cols(min_col=col, max_col=col, min_row=2):
            for c in cells:
                if isinstance(c.value, date):
                    c.number_format = "yyyy-mm-dd"
                    c.alignment = Alignment(horizontal="center")

    _autosize(ws)
    out = BytesIO()
    wb.save(out)
    out.seek(0)
    return out.getvalue()
