import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from recruitdesk.api.routes import auth, candidates, tags, reviews, health
from recruitdesk.core import config
from recruitdesk.core.errors import RecruitDeskError, translate_integrity_error
from recruitdesk.core.logging_config import setup_logging
from recruitdesk.core.rate_limit import get_client_ip
from recruitdesk.db import session as db_session
from recruitdesk.services.request_log_service import record_request

logger = logging.getLogger(__name__)


# ============================================
# ✅ STARTUP / SHUTDOWN
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    if db_session.engine is None:
        db_session.init_engine()
    if config.RUN_MIGRATIONS:
        from recruitdesk.db.migrate import run_migrations
        run_migrations()
    elif config.AUTO_CREATE_TABLES:
        from recruitdesk.db.init_db import create_tables
        create_tables()
    logger.info("RecruitDesk API started")
    yield
    db_session.dispose_engine()
    logger.info("RecruitDesk API stopped")


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="RecruitDesk API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "X-API-Key"],
    expose_headers=["X-Total-Count"],
)


# ============================================
# ✅ REQUEST AUDIT LOG
# ============================================

@app.middleware("http")
async def request_audit_log(request: Request, call_next):
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        # Unhandled errors are answered as 500 further out, log them as such
        if config.REQUEST_LOG_ENABLED:
            latency_ms = int(round((time.perf_counter() - start) * 1000))
            await run_in_threadpool(
                record_request,
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                latency_ms=latency_ms,
                ip_address=get_client_ip(request),
                user_id=getattr(request.state, "user_id", None),
                api_key_used=getattr(request.state, "api_key_used", False),
            )


# ============================================
# ✅ ERROR HANDLING
# ============================================

def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, **extra},
    )


@app.exception_handler(RecruitDeskError)
async def recruitdesk_error_handler(request: Request, exc: RecruitDeskError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error_response(400, "Invalid request", errors=errors)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    error = translate_integrity_error(exc)
    logger.error(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return _error_response(error.status_code, error.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _error_response(500, "Internal Server Error")


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(candidates.router)
app.include_router(tags.router)
app.include_router(reviews.router)
app.include_router(health.router)
