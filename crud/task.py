from sqlalchemy.orm import Session
from sqlalchemy import and_, case, desc, func, update
from typing import List, Optional
import datetime

from models.task import TaskDB, TaskStatus, TaskPriority
from schemas.task import TaskCreate, TaskFilter, TaskSortField

STATUS_RANK = case(
    (TaskDB.status == TaskStatus.PENDING, 1),
    (TaskDB.status == TaskStatus.IN_PROGRESS, 2),
    else_=3
)
PRIORITY_RANK = case(
    (TaskDB.priority == TaskPriority.HIGH, 1),
    (TaskDB.priority == TaskPriority.MEDIUM, 2),
    else_=3
)
# Задачи без срока идут последними в своей группе
DUE_DATE_ORDER = (TaskDB.due_date.is_(None), TaskDB.due_date.asc())

DEFAULT_ORDER = (
    STATUS_RANK,
    PRIORITY_RANK,
    *DUE_DATE_ORDER,
    desc(TaskDB.created_at),
    desc(TaskDB.id),
)

SORT_PREFIXES = {
    TaskSortField.PRIORITY: (PRIORITY_RANK,),
    TaskSortField.DUE_DATE: DUE_DATE_ORDER,
    TaskSortField.CREATED_AT: (desc(TaskDB.created_at),),
    TaskSortField.TITLE: (func.lower(TaskDB.title).asc(),),
}


def _overdue_clause(today: datetime.date):
    return and_(
        TaskDB.due_date.isnot(None),
        TaskDB.due_date < today,
        TaskDB.status != TaskStatus.COMPLETED
    )


def get_task(db: Session, task_id: int, user_id: int) -> Optional[TaskDB]:
    """Получить задачу владельца по ID"""
    return db.query(TaskDB).filter(TaskDB.id == task_id, TaskDB.user_id == user_id).first()


def get_tasks(
        db: Session,
        user_id: int,
        status_filter: Optional[TaskFilter] = None,
        sort_by: Optional[TaskSortField] = None,
        today: Optional[datetime.date] = None
) -> List[TaskDB]:
    """Получить список задач владельца с фильтрацией и сортировкой"""
    query = db.query(TaskDB).filter(TaskDB.user_id == user_id)

    if status_filter == TaskFilter.OVERDUE:
        query = query.filter(_overdue_clause(today or datetime.date.today()))
    elif status_filter:
        query = query.filter(TaskDB.status == TaskStatus(status_filter.value))

    order = SORT_PREFIXES.get(sort_by, ()) + DEFAULT_ORDER
    return query.order_by(*order).all()


def create_task(db: Session, user_id: int, task: TaskCreate) -> TaskDB:
    """Создать новую задачу; статус всегда pending"""
    db_task = TaskDB(
        user_id=user_id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        priority=task.priority,
        status=TaskStatus.PENDING
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def update_task(db: Session, task_id: int, user_id: int, patch: dict) -> bool:
    """Применить частичное обновление одним UPDATE; False если задача не найдена"""
    if not patch:
        return False
    result = db.execute(
        update(TaskDB)
        .where(TaskDB.id == task_id, TaskDB.user_id == user_id)
        .values(**patch)
    )
    db.commit()
    return result.rowcount > 0


def delete_task(db: Session, task_id: int, user_id: int) -> bool:
    """Удалить задачу владельца"""
    deleted = db.query(TaskDB).filter(
        TaskDB.id == task_id,
        TaskDB.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def get_task_stats(db: Session, user_id: int, today: datetime.date) -> dict:
    """Получить статистику по задачам владельца"""
    def count_where(condition):
        return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

    row = db.query(
        func.count(TaskDB.id),
        count_where(TaskDB.status == TaskStatus.PENDING),
        count_where(TaskDB.status == TaskStatus.IN_PROGRESS),
        count_where(TaskDB.status == TaskStatus.COMPLETED),
        count_where(TaskDB.priority == TaskPriority.HIGH),
        count_where(TaskDB.priority == TaskPriority.MEDIUM),
        count_where(TaskDB.priority == TaskPriority.LOW),
        count_where(_overdue_clause(today)),
    ).filter(TaskDB.user_id == user_id).one()

    keys = ('total', 'pending', 'in_progress', 'completed', 'high', 'medium', 'low', 'overdue')
    return {key: int(value or 0) for key, value in zip(keys, row)}
