# student_records/main.py
import logging
import uuid

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from .core.config import settings
from .core.errors import StudentRecordError
from .core.logging import setup_logging
from .db.session import init_db

# Routers
from .routers import health, students

setup_logging()
log = logging.getLogger("students.api")

app = FastAPI(title="Student Record Service", version="1.0.0")


# ---------------- Correlation-ID ----------------
@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    cid = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    request.state.correlation_id = cid
    resp = await call_next(request)
    resp.headers["X-Correlation-ID"] = cid
    return resp


# ---------------- Lỗi nghiệp vụ -> JSON ----------------
@app.exception_handler(StudentRecordError)
async def student_record_error_handler(request: Request, exc: StudentRecordError):
    content = {"detail": exc.message, "code": exc.code}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


# ---------------- Global exception handler ----------------
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.error(
        "Unhandled error on %s (cid=%s)",
        request.url.path,
        getattr(request.state, "correlation_id", None),
        exc_info=exc,
    )
    content = {"detail": "An internal server error occurred."}
    if settings.is_development:
        content["error"] = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content=content)


# ---------------- Mount routers ----------------
app.include_router(health.router,   prefix="/api", tags=["Health"])
app.include_router(students.router, prefix="/api")


# ---------------- Startup ----------------
@app.on_event("startup")
def startup():
    init_db()
