import datetime

import pytest
from sqlalchemy.orm import Session

from crud.task import (
    create_task,
    delete_task,
    get_task,
    get_task_stats,
    get_tasks,
    update_task,
)
from models.task import TaskPriority, TaskStatus
from schemas.task import TaskCreate, TaskFilter, TaskSortField

TODAY = datetime.date(2030, 6, 15)
TOMORROW = TODAY + datetime.timedelta(days=1)
YESTERDAY = TODAY - datetime.timedelta(days=1)


@pytest.fixture
def owner(make_user):
    return make_user("owner")


@pytest.fixture
def stranger(make_user):
    return make_user("stranger")


def _task(db, user, title, status=TaskStatus.PENDING, **fields):
    task = create_task(db, user.id, TaskCreate(title=title, **fields))
    if status != TaskStatus.PENDING:
        update_task(db, task.id, user.id, {"status": status})
    return task


class TestTaskCRUDFunctions:
    """Тесты для функций из crud/task.py"""

    def test_create_task_defaults(self, db_session: Session, owner):
        """Новая задача: статус pending, приоритет medium"""
        task = create_task(db_session, owner.id, TaskCreate(title="  Write report  "))
        assert task.id is not None
        assert task.title == "Write report"
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM
        assert task.description is None
        assert task.due_date is None
        assert task.created_at is not None
        assert task.updated_at is not None

    def test_get_task_is_owner_scoped(self, db_session: Session, owner, stranger):
        """Чужая задача не находится"""
        task = _task(db_session, owner, "Mine")
        assert get_task(db_session, task.id, owner.id).id == task.id
        assert get_task(db_session, task.id, stranger.id) is None
        assert get_task(db_session, 99999, owner.id) is None

    def test_update_task_applies_only_patch_fields(self, db_session: Session, owner):
        """Обновляются только переданные колонки"""
        task = _task(db_session, owner, "Original", description="Keep me",
                     due_date=TOMORROW, priority=TaskPriority.HIGH)

        assert update_task(db_session, task.id, owner.id, {"status": TaskStatus.COMPLETED}) is True

        refreshed = get_task(db_session, task.id, owner.id)
        assert refreshed.status == TaskStatus.COMPLETED
        assert refreshed.title == "Original"
        assert refreshed.description == "Keep me"
        assert refreshed.due_date == TOMORROW
        assert refreshed.priority == TaskPriority.HIGH

    def test_update_task_can_clear_optional_fields(self, db_session: Session, owner):
        task = _task(db_session, owner, "Clear", description="text", due_date=TOMORROW)
        update_task(db_session, task.id, owner.id, {"description": None, "due_date": None})
        refreshed = get_task(db_session, task.id, owner.id)
        assert refreshed.description is None
        assert refreshed.due_date is None

    def test_update_task_not_owned_or_empty(self, db_session: Session, owner, stranger):
        task = _task(db_session, owner, "Mine")
        assert update_task(db_session, task.id, stranger.id, {"title": "Hijacked"}) is False
        assert update_task(db_session, task.id, owner.id, {}) is False
        assert get_task(db_session, task.id, owner.id).title == "Mine"

    def test_delete_task(self, db_session: Session, owner, stranger):
        # после удаления объект отсоединён от сессии, id берём заранее
        task_id = _task(db_session, owner, "Delete me").id
        assert delete_task(db_session, task_id, stranger.id) is False
        assert delete_task(db_session, task_id, owner.id) is True
        assert delete_task(db_session, task_id, owner.id) is False
        assert get_task(db_session, task_id, owner.id) is None


class TestTaskOrdering:
    """Порядок списка задач"""

    def test_default_composite_order(self, db_session: Session, owner):
        """pending/high/today, pending/low/tomorrow, completed/high"""
        completed = _task(db_session, owner, "Done", status=TaskStatus.COMPLETED,
                          priority=TaskPriority.HIGH)
        low_tomorrow = _task(db_session, owner, "Low", priority=TaskPriority.LOW, due_date=TOMORROW)
        high_today = _task(db_session, owner, "High", priority=TaskPriority.HIGH, due_date=TODAY)

        ids = [t.id for t in get_tasks(db_session, owner.id, today=TODAY)]
        assert ids == [high_today.id, low_tomorrow.id, completed.id]

    def test_status_groups(self, db_session: Session, owner):
        """pending, затем in_progress, затем completed независимо от приоритета"""
        done = _task(db_session, owner, "Done", status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH)
        doing = _task(db_session, owner, "Doing", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH)
        todo = _task(db_session, owner, "Todo", priority=TaskPriority.LOW)

        ids = [t.id for t in get_tasks(db_session, owner.id)]
        assert ids == [todo.id, doing.id, done.id]

    def test_undated_tasks_sort_last_within_group(self, db_session: Session, owner):
        undated = _task(db_session, owner, "Someday")
        later = _task(db_session, owner, "Later", due_date=TOMORROW + datetime.timedelta(days=5))
        sooner = _task(db_session, owner, "Sooner", due_date=TOMORROW)

        ids = [t.id for t in get_tasks(db_session, owner.id)]
        assert ids == [sooner.id, later.id, undated.id]

    def test_newest_first_as_tiebreak(self, db_session: Session, owner):
        first = _task(db_session, owner, "First")
        second = _task(db_session, owner, "Second")

        ids = [t.id for t in get_tasks(db_session, owner.id)]
        assert ids == [second.id, first.id]

    def test_sort_by_title(self, db_session: Session, owner):
        _task(db_session, owner, "banana")
        _task(db_session, owner, "Apple")
        _task(db_session, owner, "cherry", status=TaskStatus.COMPLETED)

        titles = [t.title for t in get_tasks(db_session, owner.id, sort_by=TaskSortField.TITLE)]
        assert titles == ["Apple", "banana", "cherry"]

    def test_sort_by_due_date_ignores_status_group(self, db_session: Session, owner):
        done_early = _task(db_session, owner, "Done early", status=TaskStatus.COMPLETED, due_date=TODAY)
        pending_late = _task(db_session, owner, "Pending late", due_date=TOMORROW)
        undated = _task(db_session, owner, "Undated")

        ids = [t.id for t in get_tasks(db_session, owner.id, sort_by=TaskSortField.DUE_DATE)]
        assert ids == [done_early.id, pending_late.id, undated.id]

    def test_only_owner_tasks_listed(self, db_session: Session, owner, stranger):
        _task(db_session, owner, "Mine")
        _task(db_session, stranger, "Theirs")
        assert [t.title for t in get_tasks(db_session, owner.id)] == ["Mine"]


class TestTaskFiltersAndStats:

    def test_filter_by_status(self, db_session: Session, owner):
        _task(db_session, owner, "Todo")
        _task(db_session, owner, "Doing", status=TaskStatus.IN_PROGRESS)
        _task(db_session, owner, "Done", status=TaskStatus.COMPLETED)

        doing = get_tasks(db_session, owner.id, status_filter=TaskFilter.IN_PROGRESS)
        assert [t.title for t in doing] == ["Doing"]

    def test_filter_overdue(self, db_session: Session, owner):
        _task(db_session, owner, "Late", due_date=YESTERDAY)
        _task(db_session, owner, "Late but done", status=TaskStatus.COMPLETED, due_date=YESTERDAY)
        _task(db_session, owner, "Due today", due_date=TODAY)
        _task(db_session, owner, "No date")

        overdue = get_tasks(db_session, owner.id, status_filter=TaskFilter.OVERDUE, today=TODAY)
        assert [t.title for t in overdue] == ["Late"]

    def test_stats(self, db_session: Session, owner, stranger):
        """3 pending + 1 просроченная pending + 1 completed"""
        _task(db_session, owner, "A", priority=TaskPriority.HIGH)
        _task(db_session, owner, "B")
        _task(db_session, owner, "C", priority=TaskPriority.LOW, due_date=TOMORROW)
        _task(db_session, owner, "Overdue", due_date=YESTERDAY)
        _task(db_session, owner, "Done", status=TaskStatus.COMPLETED, due_date=YESTERDAY)
        _task(db_session, stranger, "Not counted")

        stats = get_task_stats(db_session, owner.id, TODAY)
        assert stats == {
            'total': 5,
            'pending': 4,
            'in_progress': 0,
            'completed': 1,
            'high': 1,
            'medium': 3,
            'low': 1,
            'overdue': 1,
        }

    def test_stats_without_tasks(self, db_session: Session, owner):
        stats = get_task_stats(db_session, owner.id, TODAY)
        assert stats['total'] == 0
        assert all(value == 0 for value in stats.values())
