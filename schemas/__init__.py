from .user import UserCreate, UserLogin, UserResponse, UserProfile
from .task import TaskCreate, TaskUpdate, TaskResponse, TaskStats, TaskFilter, TaskSortField
from .validation import FieldError, field_errors
from .response import (
    MessageResponse,
    ErrorResponse,
    AuthResponse,
    ProfileResponse,
    TaskEnvelope,
    TaskListResponse,
    StatsResponse,
    HealthCheckResponse
)

__all__ = [
    # User schemas
    "UserCreate", "UserLogin", "UserResponse", "UserProfile",

    # Task schemas
    "TaskCreate", "TaskUpdate", "TaskResponse", "TaskStats", "TaskFilter", "TaskSortField",

    # Validation
    "FieldError", "field_errors",

    # Response schemas
    "MessageResponse",
    "ErrorResponse",
    "AuthResponse",
    "ProfileResponse",
    "TaskEnvelope",
    "TaskListResponse",
    "StatsResponse",
    "HealthCheckResponse"
]
