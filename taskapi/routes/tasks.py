# taskapi/routes/tasks.py
"""CRUD and status endpoints for tasks."""

from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session

from taskapi.database import get_session
from taskapi.models import (
    MessageEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskRead,
    TaskStatus,
    TaskUpdate,
)
from taskapi.repository import TaskRepository

router = APIRouter(prefix="/tasks", tags=["tasks"])

# Ids beyond a signed 64-bit integer cannot reach the database driver.
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


def _task_id():
    return Path(ge=MIN_TASK_ID, le=MAX_TASK_ID)


def get_repository(session: Session = Depends(get_session)) -> TaskRepository:
    return TaskRepository(session)


def _envelope(message: str, task) -> TaskEnvelope:
    return TaskEnvelope(message=message, data=TaskRead.model_validate(task))


@router.get("")
def list_tasks(repo: TaskRepository = Depends(get_repository)) -> TaskListEnvelope:
    """List all tasks, newest first."""
    tasks = [TaskRead.model_validate(task) for task in repo.list_all()]
    return TaskListEnvelope(message="Tasks fetched successfully", data=tasks)


@router.get("/{task_id}")
def get_task(
    task_id: int = _task_id(), repo: TaskRepository = Depends(get_repository)
) -> TaskEnvelope:
    """Get a single task by ID."""
    return _envelope("Task fetched successfully", repo.get(task_id))


@router.post("", status_code=201)
def create_task(body: TaskCreate, repo: TaskRepository = Depends(get_repository)) -> TaskEnvelope:
    """Create a new task."""
    return _envelope("Task created successfully", repo.create(body))


@router.put("/{task_id}")
def update_task(
    task_id: int = _task_id(),
    body: Optional[TaskUpdate] = None,
    repo: TaskRepository = Depends(get_repository),
) -> TaskEnvelope:
    """Update an existing task. Only provided fields are changed.

    A request without a body only refreshes ``updated_at``.
    """
    changes = body if body is not None else TaskUpdate()
    return _envelope("Task updated successfully", repo.update(task_id, changes))


@router.delete("/{task_id}")
def delete_task(
    task_id: int = _task_id(), repo: TaskRepository = Depends(get_repository)
) -> MessageEnvelope:
    """Delete a task by ID."""
    repo.delete(task_id)
    return MessageEnvelope(message="Task deleted successfully")


@router.patch("/{task_id}/complete")
def complete_task(
    task_id: int = _task_id(), repo: TaskRepository = Depends(get_repository)
) -> TaskEnvelope:
    return _envelope("Task marked as completed", repo.set_status(task_id, TaskStatus.completed))


@router.patch("/{task_id}/pending")
def reopen_task(
    task_id: int = _task_id(), repo: TaskRepository = Depends(get_repository)
) -> TaskEnvelope:
    return _envelope("Task marked as pending", repo.set_status(task_id, TaskStatus.pending))
