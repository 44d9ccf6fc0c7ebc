# scripts/import_students.py
"""
Nhập học viên hàng loạt từ file .csv / .xlsx vào DB theo DB_URL hiện tại.

    python scripts/import_students.py students.xlsx
"""
import argparse
import sys
from pathlib import Path

from student_records.core.errors import StudentRecordError
from student_records.core.logging import setup_logging
from student_records.db.session import SessionLocal, engine, init_db
from student_records.services.import_service import bulk_import


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Bulk import students from CSV/XLSX")
    parser.add_argument("file", type=Path, help="đường dẫn file .csv hoặc .xlsx")
    args = parser.parse_args(argv)

    setup_logging()
    print("DB =", engine.url.render_as_string(hide_password=True))
    init_db()

    if not args.file.is_file():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 2

    db = SessionLocal()
    try:
        n = bulk_import(db, args.file.read_bytes(), args.file.name)
    except StudentRecordError as e:
        print(f"FAILED [{e.code}] {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    if n == 0:
        print("No students were added.")
        return 1
    print(f"IMPORTED {n} students")
    return 0


if __name__ == "__main__":
    sys.exit(main())
