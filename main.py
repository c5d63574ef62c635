import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

import models  # noqa: F401  регистрирует таблицы в Base.metadata
from api.endpoints import auth_router, tasks_router
from config import get_settings
from database import engine, Base
from exceptions import TaskTrackerError
from logging_setup import setup_logging
from schemas.response import ErrorResponse, HealthCheckResponse
from schemas.validation import field_errors

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)
app = FastAPI(title="Task Tracker API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(auth_router)
app.include_router(tasks_router)


def _error_response(status_code: int, error: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(TaskTrackerError)
async def domain_error_handler(request: Request, exc: TaskTrackerError):
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return _error_response(exc.status_code, exc.message, exc.details, headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = field_errors(exc.errors())
    logger.info(f"Validation failed for {request.method} {request.url.path}: {[e.field for e in errors]}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        [error.model_dump() for error in errors]
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error for {request.method} {request.url.path}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.get("/")
def read_root():
    return {"message": "Task Tracker API"}


@app.get("/health", response_model=HealthCheckResponse)
def health_check():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        database = "unavailable"
    return HealthCheckResponse(
        status="healthy" if database == "ok" else "degraded",
        service="task-tracker",
        database=database
    )

#Запуск через консоль: uvicorn main:app --reload
