from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from todo_api.database import get_db
from todo_api.schemas.task import Message, TaskCreate, TaskOut, TaskUpdate, TaskUpdated
from todo_api.services import todo_service
from todo_api.utils.auth import get_current_user_id

router = APIRouter(prefix="/api/todos", tags=["todos"])

# The auth gate is declared before the session on every route, so a rejected
# request never opens a database session.


@router.get("", response_model=List[TaskOut])
def list_todos(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return todo_service.list_todos(db, user_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_todo(task: TaskCreate, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return todo_service.create_todo(db, user_id, task)


@router.put("/{todo_id}", response_model=TaskUpdated)
def update_todo(todo_id: int, task: TaskUpdate, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    completed = todo_service.update_todo(db, user_id, todo_id, task)
    return {"message": "Todo updated successfully", "completed": completed}


@router.delete("/{todo_id}", response_model=Message)
def delete_todo(todo_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    todo_service.delete_todo(db, user_id, todo_id)
    return {"message": "Todo deleted successfully"}
