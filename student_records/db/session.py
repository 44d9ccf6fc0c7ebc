# student_records/db/session.py
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker

from .base import Base
from ..core.config import settings

log = logging.getLogger("db")

DB_URL = settings.DB_URL


def _enable_sqlite_fk(dbapi_conn, connection_record):
    # SQLite mặc định tắt foreign key -> không có ON DELETE CASCADE
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_lower(dbapi_conn, connection_record):
    # lower() gốc của SQLite chỉ hạ chữ ASCII ("É" giữ nguyên) -> ilike không khớp tên có dấu
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def make_engine(url_str: str, **kw):
    url = make_url(url_str)
    connect_args = {}
    is_sqlite = url.get_backend_name().startswith("sqlite")
    if is_sqlite:
        connect_args["check_same_thread"] = False
    elif url.get_backend_name().startswith("mysql"):
        connect_args["charset"] = "utf8mb4"

    options = dict(pool_pre_ping=True, future=True)
    if not is_sqlite:
        options["pool_recycle"] = 3600
    options.update(kw)

    engine = create_engine(url_str, connect_args=connect_args, **options)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_fk)
        event.listen(engine, "connect", _register_sqlite_lower)
    return engine


# engine ban đầu theo cấu hình
engine = make_engine(DB_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db(bind=None):
    """Tạo bảng students/applications nếu chưa có."""
    from .. import models  # noqa: F401  (đăng ký model vào Base.metadata)

    target = bind or engine
    Base.metadata.create_all(bind=target)
    log.info("DB init OK with %s", target.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
