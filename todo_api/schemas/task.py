from datetime import datetime, UTC
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

PRIORITIES = ("low", "medium", "high")


class _TaskFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date_is_none(cls, v):
        # date pickers send "" when cleared
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("due_date")
    @classmethod
    def due_date_as_naive_utc(cls, v):
        # stored without tzinfo, like created_at
        if v is not None and v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class TaskCreate(_TaskFields):
    pass


class TaskUpdate(_TaskFields):
    """Full replacement of a task: omitted fields are written as null/false."""

    completed: Optional[bool] = None


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    priority: str
    due_date: Optional[datetime] = None
    completed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskUpdated(BaseModel):
    message: str
    completed: bool


class Message(BaseModel):
    message: str
