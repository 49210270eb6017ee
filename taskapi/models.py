# taskapi/models.py
"""Task table, request schemas and response envelopes."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlalchemy import Column, DateTime, Text
from sqlalchemy.dialects import mysql
from sqlmodel import Field, SQLModel

# MySQL DATETIME drops fractional seconds unless fsp is given.
TIMESTAMP_TYPE = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


def utcnow() -> datetime:
    """Naive UTC now; naive so values compare equal once read back from the store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, Enum):
    pending = "pending"
    completed = "completed"


class Task(SQLModel, table=True):
    """Task database table."""
    __tablename__ = "tasks"
    # Without AUTOINCREMENT SQLite hands out the id of a deleted last row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: TaskStatus = Field(default=TaskStatus.pending)
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(TIMESTAMP_TYPE, nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(TIMESTAMP_TYPE, nullable=False)
    )


class TaskRead(SQLModel):
    """Public shape of a task inside a response envelope."""
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


class TaskCreate(SQLModel):
    """Schema for creating a task. Title is required, rest have defaults."""
    title: str = Field(max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.pending

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("title must not be blank")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        if v is None or v == "":
            return TaskStatus.pending
        return v


class TaskUpdate(SQLModel):
    """Schema for updating a task. All fields optional.

    A blank title or status counts as not supplied, so the stored value is
    kept. Description is different: an explicit null or empty string is
    written as given.
    """
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def blank_title_is_unset(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_unset(cls, v):
        if v == "":
            return None
        return v


class MessageEnvelope(SQLModel):
    message: str


class TaskEnvelope(MessageEnvelope):
    data: TaskRead


class TaskListEnvelope(MessageEnvelope):
    data: list[TaskRead]
