# ================================
# file: student_records/utils/dates.py
# ================================
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

# Định dạng "invariant": không phụ thuộc locale máy chạy.
# ISO trước, sau đó kiểu Mỹ MM/dd/yyyy (có/không kèm giờ), rồi tên tháng tiếng Anh.
INVARIANT_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_date_invariant(v: object) -> Optional[date]:
    """
    Đổi giá trị ô (chuỗi hoặc date/datetime gốc của Excel) -> date.
    Trả None nếu không đọc được; caller tự quyết báo lỗi.
    """
    if v is None:
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    s = str(v).strip()
    if not s:
        return None
    for fmt in INVARIANT_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        return None


def fmt_date_iso(v: Optional[date]) -> str:
    if v is None:
        return ""
    if isinstance(v, datetime):
        v = v.date()
    return v.isoformat()
