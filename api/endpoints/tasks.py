from fastapi import APIRouter, Depends, Path, status, Query
from sqlalchemy.orm import Session
from typing import Optional

from auth import current_user_auth
from database import get_db
from schemas.task import TaskCreate, TaskUpdate, TaskFilter, TaskSortField
from schemas.response import MessageResponse, TaskEnvelope, TaskListResponse, StatsResponse
from services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

# Верхняя граница INTEGER в SQLite/PostgreSQL BIGINT
MAX_TASK_ID = 2 ** 63 - 1


def get_task_service(
        db: Session = Depends(get_db),
        current_user_id: int = Depends(current_user_auth)
) -> TaskService:
    return TaskService(db, current_user_id)


@router.get("", response_model=TaskListResponse)
def read_tasks(
        status_filter: Optional[TaskFilter] = Query(None, alias="status", description="Filter by status or 'overdue'"),
        sort_by: Optional[TaskSortField] = Query(None, description="Sort key applied before the default order"),
        service: TaskService = Depends(get_task_service)
):
    """Получить задачи текущего пользователя"""
    return TaskListResponse(tasks=service.list(status_filter=status_filter, sort_by=sort_by))


@router.get("/stats/summary", response_model=StatsResponse)
def read_stats(service: TaskService = Depends(get_task_service)):
    """Получить статистику по задачам"""
    return StatsResponse(stats=service.stats())


@router.get("/{task_id}", response_model=TaskEnvelope)
def read_task(
        task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
        service: TaskService = Depends(get_task_service)
):
    """Получить задачу по ID"""
    return TaskEnvelope(task=service.get(task_id))


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Создать новую задачу"""
    return TaskEnvelope(
        message="Task created successfully",
        task=service.create(task)
    )


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
        task: TaskUpdate,
        task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
        service: TaskService = Depends(get_task_service)
):
    """Обновить задачу (частично)"""
    return TaskEnvelope(
        message="Task updated successfully",
        task=service.update(task_id, task)
    )


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
        task_id: int = Path(..., ge=1, le=MAX_TASK_ID),
        service: TaskService = Depends(get_task_service)
):
    """Удалить задачу"""
    service.delete(task_id)
    return MessageResponse(message="Task deleted successfully")
