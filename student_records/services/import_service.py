# ================================
# file: student_records/services/import_service.py
# ================================
from __future__ import annotations

import io
import logging
import os
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

import pandas as pd
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import (
    ConflictError,
    ParseError,
    UnsupportedFormatError,
    ValidationError,
)
from ..models import Student
from ..utils.dates import parse_date_invariant

log = logging.getLogger("students.import")

# Thứ tự cột chuẩn: CSV đọc theo tên header, XLSX đọc theo vị trí
FIELDS = ("first_name", "last_name", "email", "date_of_birth", "enrollment_date")
HEADERS = ("FirstName", "LastName", "Email", "DateOfBirth", "EnrollmentDate")
DATE_FIELDS = ("date_of_birth", "enrollment_date")

Row = Dict[str, Any]
# (số dòng trong file, dòng đã decode); dòng 1 là header
NumberedRow = Tuple[int, Row]


def _header_key(name: object) -> str:
    # "FirstName", "first_name", "First Name" -> "firstname"
    return re.sub(r"[\s_\-]+", "", str(name or "")).lower()


_HEADER_TO_FIELD = {_header_key(h): f for h, f in zip(HEADERS, FIELDS)}


def _cell_text(v: object) -> str:
    if v is None:
        return ""
    try:
        if pd.isna(v):
            return ""
    except (TypeError, ValueError):
        pass
    return str(v).strip()


# ---------- Decoders: bytes -> list[dict] (chưa ép kiểu ngày) ----------
def _is_blank(values) -> bool:
    return all(_cell_text(v) == "" for v in values)


def _decode_csv(data: bytes) -> List[NumberedRow]:
    try:
        # giữ dòng trống để index khớp số dòng trong file
        df = pd.read_csv(
            io.BytesIO(data),
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            skipinitialspace=True,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        raise ParseError(f"Cannot read CSV file: {e}") from e

    columns = {}
    for col in df.columns:
        field = _HEADER_TO_FIELD.get(_header_key(col))
        if field and field not in columns:
            columns[field] = col

    missing = [h for h, f in zip(HEADERS, FIELDS) if f not in columns]
    if missing:
        raise ParseError(
            f"Missing required columns: {', '.join(missing)}",
            details={"missing": missing},
        )

    return [
        (idx + 2, {f: row[columns[f]] for f in FIELDS})
        for idx, row in df.iterrows()
        if not _is_blank(row.tolist())
    ]


def _decode_xlsx(data: bytes) -> List[NumberedRow]:
    try:
        df = pd.read_excel(
            io.BytesIO(data),
            sheet_name=0,
            header=None,
            dtype=object,
            engine="openpyxl",
        )
    except Exception as e:
        raise ParseError(f"Cannot read Excel file: {e}") from e

    # Dòng 1 là header -> bỏ; dòng trống hoàn toàn -> bỏ
    body = df.iloc[1:].dropna(how="all")
    if body.empty:
        return []
    if body.shape[1] < len(FIELDS):
        raise ParseError(
            f"Excel sheet must have {len(FIELDS)} columns: {', '.join(HEADERS)}"
        )

    # index của df = số dòng trên sheet - 1
    rows = []
    for idx, *values in body.itertuples(index=True, name=None):
        rows.append((idx + 1, {f: values[i] for i, f in enumerate(FIELDS)}))
    return rows


class ImportFormat(str, Enum):
    CSV = ".csv"
    XLSX = ".xlsx"

    @classmethod
    def from_filename(cls, filename: str) -> "ImportFormat":
        ext = os.path.splitext((filename or "").strip())[1].lower()
        try:
            return cls(ext)
        except ValueError:
            raise UnsupportedFormatError(
                "Invalid file format. Only CSV or Excel (.xlsx) files are supported.",
                details={"filename": filename},
            ) from None

    @property
    def decoder(self) -> Callable[[bytes], List[NumberedRow]]:
        return DECODERS[self]


DECODERS: Dict[ImportFormat, Callable[[bytes], List[NumberedRow]]] = {
    ImportFormat.CSV: _decode_csv,
    ImportFormat.XLSX: _decode_xlsx,
}


# ---------- Canonical rows ----------
def _to_student(line_no: int, raw: Row) -> Student:
    """
    Dòng đã decode -> Student mới (is_deleted=False).
    Chỉ ép kiểu ngày; KHÔNG áp luật độ dài/ngày tương lai như khi tạo từng học viên.
    """
    values = {}
    for f in FIELDS:
        if f in DATE_FIELDS:
            cell = raw.get(f)
            d = parse_date_invariant(None if _cell_text(cell) == "" else cell)
            if d is None:
                header = HEADERS[FIELDS.index(f)]
                raise ParseError(
                    f"Row {line_no}: invalid date in column {header}: '{_cell_text(cell)}'",
                    details={"row": line_no, "column": header},
                )
            values[f] = d
        else:
            values[f] = _cell_text(raw.get(f))
    return Student(is_deleted=False, **values)


def decode_students(data: bytes, filename: str) -> List[Student]:
    fmt = ImportFormat.from_filename(filename)
    return [_to_student(line_no, raw) for line_no, raw in fmt.decoder(data)]


def bulk_import(db: Session, data: bytes, filename: str) -> int:
    """
    Nhập hàng loạt từ .csv / .xlsx. Trả số học viên đã thêm; 0 = file không có dòng nào.
    Tất cả hoặc không: 1 dòng lỗi / trùng email -> rollback cả lô.
    """
    if not data:
        raise ValidationError("Invalid file uploaded: file is empty.")

    students = decode_students(data, filename)
    if not students:
        log.info("Import %s: no rows", filename)
        return 0

    db.add_all(students)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        log.warning("Import %s aborted: duplicate email", filename)
        raise ConflictError(
            "Import aborted: one or more emails already exist or are duplicated in the file."
        ) from e

    log.info("Import %s: %d students", filename, len(students))
    return len(students)
