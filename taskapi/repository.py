# taskapi/repository.py
"""Task persistence: one method per logical operation over the tasks table."""

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from taskapi.models import Task, TaskCreate, TaskStatus, TaskUpdate, utcnow

logger = logging.getLogger(__name__)


class TaskNotFoundError(Exception):
    """No row matches the requested task id."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreError(Exception):
    """A query failed or the database could not be reached."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """Current time, nudged past ``previous`` if the clock has not moved on."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class TaskRepository:
    """Runs task queries on a single session.

    The session comes from the engine's pool and is released by whoever
    opened it (``get_session`` for HTTP requests).
    """

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _store_errors(self, message: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("%s: %s", message, exc)
            raise StoreError(message, str(exc)) from exc

    def _get_or_raise(self, task_id: int) -> Task:
        task = self.session.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _save(self, task: Task) -> Task:
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def list_all(self) -> list[Task]:
        """All tasks, newest first."""
        statement = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        with self._store_errors("Failed to fetch tasks"):
            return list(self.session.exec(statement).all())

    def get(self, task_id: int) -> Task:
        with self._store_errors("Failed to fetch task"):
            return self._get_or_raise(task_id)

    def create(self, body: TaskCreate) -> Task:
        now = utcnow()
        task = Task(
            title=body.title,
            description=body.description,
            status=body.status,
            created_at=now,
            updated_at=now,
        )
        with self._store_errors("Failed to create task"):
            task = self._save(task)
        logger.info("Created task %s", task.id)
        return task

    def update(self, task_id: int, changes: TaskUpdate) -> Task:
        """Apply the supplied fields, keeping stored values for the rest.

        Read and write are separate statements; concurrent updates to the
        same task are last-writer-wins.
        """
        with self._store_errors("Failed to update task"):
            task = self._get_or_raise(task_id)
            if changes.title:
                task.title = changes.title
            if "description" in changes.model_fields_set:
                task.description = changes.description
            if changes.status:
                task.status = changes.status
            task.updated_at = next_timestamp(task.updated_at)
            return self._save(task)

    def delete(self, task_id: int) -> None:
        with self._store_errors("Failed to delete task"):
            task = self._get_or_raise(task_id)
            self.session.delete(task)
            self.session.commit()
        logger.info("Deleted task %s", task_id)

    def set_status(self, task_id: int, status: TaskStatus) -> Task:
        with self._store_errors("Failed to update task"):
            task = self._get_or_raise(task_id)
            task.status = status
            task.updated_at = next_timestamp(task.updated_at)
            return self._save(task)
