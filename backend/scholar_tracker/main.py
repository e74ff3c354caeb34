import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from scholar_tracker.api import endpoints
from scholar_tracker.config import ALLOWED_ORIGINS, DEBUG, ENV, LOG_LEVEL
from scholar_tracker.db.session import Base, engine
from scholar_tracker.errors import TrackerError
from scholar_tracker.models import scholarship  # noqa: F401  registers the table on Base

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Scholarship Tracker")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request latency middleware
_req_logger = logging.getLogger("request_timing")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    processing_time_ms = (time.perf_counter() - start) * 1000.0
    _req_logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, processing_time_ms)
    response.headers["x-backend-processing-time-ms"] = str(int(processing_time_ms))
    return response


# -----------------
# Error payloads: {message, field?}
# -----------------
@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(loc) or None
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    content = {"message": message}
    if field:
        content["field"] = field
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=getattr(exc, "headers", None))


@app.get("/health")
def health():
    return {"status": "ok", "env": ENV}


@app.get("/ready")
def ready():
    return {"status": "ready"}


# -----------------
# API + frontend
# -----------------
app.include_router(endpoints.router, prefix="/api")


@app.on_event("startup")
def on_startup_create_tables():
    if ENV == "development" or DEBUG:
        Base.metadata.create_all(bind=engine)
        logger.info("Ensured database tables exist (env=%s)", ENV)


@app.get("/")
def root():
    return RedirectResponse(url="/docs")


try:
    from pathlib import Path
    frontend_build_dir = Path(__file__).resolve().parents[2] / "frontend" / "dist"
    if frontend_build_dir.exists():
        app.mount(
            "/", StaticFiles(directory=str(frontend_build_dir), html=True), name="frontend"
        )
except RuntimeError:
    logger.warning("Frontend build directory could not be mounted")
