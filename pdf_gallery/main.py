# pdf_gallery/main.py
import time

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .database import engine
from . import models
from .api import auth_router, pdfs_router, users_router
from .errors import GalleryError, InvalidIdError, RecordValidationError
from .utils.logging import api_logger
from .config import settings

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="PDF Gallery API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Disposition"],
)

# Include routers
app.include_router(auth_router)
app.include_router(pdfs_router)
app.include_router(users_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        api_logger.info(f"{request.method} {request.url.path}", extra={
            "status_code": status_code,
            "duration_ms": round((time.time() - start_time) * 1000, 2)
        })


def error_response(exc: GalleryError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code}
    )


@app.exception_handler(GalleryError)
async def gallery_error_handler(request: Request, exc: GalleryError):
    log = api_logger.error if exc.status_code >= 500 else api_logger.warning
    log(f"{exc.code}: {exc.message}", extra={
        "path": request.url.path,
        "method": request.method,
        "user_id": getattr(request.state, "user_id", None)
    })
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed path ids are a client error of their own; bodies keep FastAPI's 422
    if any(tuple(error["loc"][:1]) == ("path",) for error in exc.errors()):
        return error_response(InvalidIdError())
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(ResponseValidationError)
async def record_validation_handler(request: Request, exc: ResponseValidationError):
    api_logger.error("Stored record failed validation", extra={
        "path": request.url.path,
        "errors": str(exc.errors())
    })
    return error_response(RecordValidationError())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    api_logger.error("Unhandled error", extra={
        "path": request.url.path,
        "method": request.method,
        "query": str(request.query_params),
        "user_id": getattr(request.state, "user_id", None),
        "error": str(exc)
    }, exc_info=exc)

    content = {"detail": "Something went wrong!", "code": "INTERNAL_ERROR"}
    if settings.DEBUG:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.get("/")
async def root():
    return {"message": "PDF Gallery API is running"}
