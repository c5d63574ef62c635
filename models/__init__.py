from .user import UserDB
from .task import TaskDB, TaskStatus, TaskPriority

__all__ = ["UserDB", "TaskDB", "TaskStatus", "TaskPriority"]
