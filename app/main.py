# File: app/main.py
import os
import time
import logging
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import InventraError
from app.db.database import Base, SessionLocal, engine
from app.services.bootstrap import ensure_admin
from app import models  # noqa: F401  registers every table on Base.metadata

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL))
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

allowed_origins = settings.cors_origins

# CORS middleware goes on before the request logger
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["Authorization", "Content-Type"],
    expose_headers=["X-Process-Time", "Content-Disposition"],
    max_age=3600,
)


def error_response(status_code: int, message: str, data=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


# Request logging middleware (AFTER CORS)
@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log every request with its status and timing"""
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(
            f"{request.method} {request.url.path} - Error: {str(e)} - Time: {process_time:.4f}s"
        )
        return error_response(500, str(e) or "Internal server error")

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


# Error handlers
@app.exception_handler(InventraError)
async def inventra_error_handler(request: Request, exc: InventraError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    return error_response(exc.status_code, exc.message, exc.data)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query strings are plain 400s"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(400, message)


@app.on_event("startup")
async def startup_event():
    """Create tables for local runs and make sure the bootstrap admin exists"""
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API V1 prefix: {settings.API_V1_STR}")
    logger.info(f"Allowed CORS origins: {allowed_origins}")

    # Production schemas are managed by alembic
    if not settings.is_production:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_admin(db)
    finally:
        db.close()
    logger.info("Application startup completed")


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "docs_url": "/docs",
    }


# For local development
if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    host = "0.0.0.0" if settings.is_production else "127.0.0.1"
    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.is_development,
    )
