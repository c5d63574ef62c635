import enum
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional
from models.task import TaskStatus, TaskPriority


class TaskFilter(str, enum.Enum):
    """Фильтр списка задач"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskSortField(str, enum.Enum):
    """Поле сортировки списка задач"""
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"
    TITLE = "title"


def _clean_title(v):
    # Пробелы обрезаются до проверки длины
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError('Title cannot be empty')
    return v


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM

    @field_validator('title', mode='before')
    @classmethod
    def title_not_empty(cls, v):
        return _clean_title(v)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    """Частичное обновление: учитываются только переданные поля"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None

    @field_validator('title', 'priority', 'status', mode='before')
    @classmethod
    def not_null(cls, v, info):
        # description и due_date можно очистить через null, остальные поля - нет
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        if info.field_name == 'title':
            return _clean_title(v)
        return v

    def to_patch(self) -> dict:
        """Словарь колонка -> значение только для переданных полей"""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskStats(BaseModel):
    """Статистика по задачам пользователя"""
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    overdue: int = 0
