import datetime
import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

import crud.task as task_crud
from exceptions import NoFieldsProvidedError, TaskNotFoundError, ValidationFailedError
from models.task import TaskDB
from schemas.task import TaskCreate, TaskFilter, TaskSortField, TaskStats, TaskUpdate
from schemas.validation import FieldError

logger = logging.getLogger(__name__)


class TaskService:
    """Операции над задачами одного владельца.

    Каждый запрос фильтруется по owner_id, поэтому чужая задача
    неотличима от несуществующей (TaskNotFoundError, а не 403).
    """

    def __init__(
            self,
            db: Session,
            owner_id: int,
            today: Callable[[], datetime.date] = datetime.date.today
    ):
        self.db = db
        self.owner_id = owner_id
        self.today = today

    def list(
            self,
            status_filter: Optional[TaskFilter] = None,
            sort_by: Optional[TaskSortField] = None
    ) -> List[TaskDB]:
        return task_crud.get_tasks(
            self.db,
            self.owner_id,
            status_filter=status_filter,
            sort_by=sort_by,
            today=self.today()
        )

    def get(self, task_id: int) -> TaskDB:
        task = task_crud.get_task(self.db, task_id, self.owner_id)
        if task is None:
            raise TaskNotFoundError()
        return task

    def create(self, data: TaskCreate) -> TaskDB:
        self._check_due_date(data.due_date)
        task = task_crud.create_task(self.db, self.owner_id, data)
        logger.info(f"User {self.owner_id} created task {task.id}")
        return task

    def update(self, task_id: int, data: TaskUpdate) -> TaskDB:
        existing = self.get(task_id)
        patch = data.to_patch()
        if not patch:
            raise NoFieldsProvidedError()
        if 'due_date' in patch and patch['due_date'] != existing.due_date:
            self._check_due_date(patch['due_date'])

        if not task_crud.update_task(self.db, task_id, self.owner_id, patch):
            # Удалена между проверкой и обновлением
            raise TaskNotFoundError()
        logger.info(f"User {self.owner_id} updated task {task_id}: {sorted(patch)}")
        return self.get(task_id)

    def delete(self, task_id: int) -> None:
        if not task_crud.delete_task(self.db, task_id, self.owner_id):
            raise TaskNotFoundError()
        logger.info(f"User {self.owner_id} deleted task {task_id}")

    def stats(self) -> TaskStats:
        return TaskStats(**task_crud.get_task_stats(self.db, self.owner_id, self.today()))

    def _check_due_date(self, due_date: Optional[datetime.date]) -> None:
        if due_date is not None and due_date < self.today():
            raise ValidationFailedError([
                FieldError(field="due_date", message="Due date cannot be in the past")
            ])
