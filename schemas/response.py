from pydantic import BaseModel, Field
from typing import Any, Optional, List
from datetime import datetime

from schemas.user import UserResponse, UserProfile
from schemas.task import TaskResponse, TaskStats


class MessageResponse(BaseModel):
    """Ответ без данных"""
    message: str


class ErrorResponse(BaseModel):
    """Стандартный ответ для ошибок"""
    error: str
    details: Optional[Any] = None


class AuthResponse(BaseModel):
    """Ответ на регистрацию и вход"""
    message: str
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserProfile


class TaskEnvelope(BaseModel):
    message: Optional[str] = None
    task: TaskResponse


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]


class StatsResponse(BaseModel):
    stats: TaskStats


class HealthCheckResponse(BaseModel):
    """Ответ для health check эндпоинта"""
    status: str
    service: str
    database: str
    timestamp: datetime = Field(default_factory=datetime.now)
