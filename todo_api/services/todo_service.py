"""Task operations, each scoped to the caller's user id.

Every function issues exactly one statement against the store. Ownership is
enforced in the WHERE clause, so a task owned by somebody else looks exactly
like a task that does not exist.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_api.errors import NotFoundError, StoreError, ValidationError
from todo_api.models.task import Task
from todo_api.schemas.task import PRIORITIES, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _require_title(title):
    if title is None or not title.strip():
        raise ValidationError("Title is required")
    return title


def _check_priority(priority):
    if priority not in PRIORITIES:
        raise ValidationError(f"priority must be one of: {', '.join(PRIORITIES)}")
    return priority


def _store_failure(db: Session, action: str, exc: SQLAlchemyError) -> StoreError:
    db.rollback()
    logger.error("store error while %s: %s", action, exc)
    return StoreError(str(exc))


def list_todos(db: Session, user_id: int) -> List[Task]:
    query = (
        db.query(Task)
        .filter(Task.user_id == user_id)
        # undated tasks last, then soonest first; newest first on ties
        .order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.created_at.desc(), Task.id.desc())
    )
    try:
        return query.all()
    except SQLAlchemyError as e:
        raise _store_failure(db, "listing todos", e) from e


def create_todo(db: Session, user_id: int, data: TaskCreate) -> Task:
    title = _require_title(data.title)
    priority = _check_priority(data.priority or "medium")

    todo = Task(
        user_id=user_id,
        title=title,
        description=data.description,
        priority=priority,
        due_date=data.due_date,
        completed=False,
    )
    try:
        db.add(todo)
        db.commit()
        db.refresh(todo)
    except SQLAlchemyError as e:
        raise _store_failure(db, "creating a todo", e) from e
    logger.info("user %s created todo %s", user_id, todo.id)
    return todo


def update_todo(db: Session, user_id: int, todo_id: int, data: TaskUpdate) -> bool:
    """Overwrite every field of a task and return the stored completed flag.

    This is not a patch: description and due_date become null when omitted,
    completed becomes false.
    """
    title = _require_title(data.title)
    priority = _check_priority(data.priority)
    completed = bool(data.completed)

    try:
        affected = (
            db.query(Task)
            .filter(Task.id == todo_id, Task.user_id == user_id)
            .update(
                {
                    Task.title: title,
                    Task.description: data.description,
                    Task.completed: completed,
                    Task.priority: priority,
                    Task.due_date: data.due_date,
                },
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _store_failure(db, "updating a todo", e) from e

    if affected == 0:
        logger.info("user %s: todo %s not found for update", user_id, todo_id)
        raise NotFoundError("Todo not found")
    return completed


def delete_todo(db: Session, user_id: int, todo_id: int) -> None:
    try:
        affected = (
            db.query(Task)
            .filter(Task.id == todo_id, Task.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        raise _store_failure(db, "deleting a todo", e) from e

    if affected == 0:
        logger.info("user %s: todo %s not found for delete", user_id, todo_id)
        raise NotFoundError("Todo not found")
    logger.info("user %s deleted todo %s", user_id, todo_id)
