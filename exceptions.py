from typing import List, Optional

from fastapi import status

from schemas.validation import FieldError


class TaskTrackerError(Exception):
    """Базовая ошибка предметной области; несет HTTP статус и публичное сообщение"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    @property
    def details(self):
        return None


class ValidationFailedError(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, errors: List[FieldError]):
        super().__init__()
        self.errors = errors

    @property
    def details(self):
        return [error.model_dump() for error in self.errors]


class DuplicateAccountError(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User with this email or username already exists"


class InvalidCredentialsError(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class MissingTokenError(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"


class TokenExpiredError(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token expired"


class InvalidTokenError(TaskTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid token"


class UserNotFoundError(TaskTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class TaskNotFoundError(TaskTrackerError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Task not found"


class NoFieldsProvidedError(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No fields to update"
