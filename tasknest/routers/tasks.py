import logging
import math
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, authenticate
from ..core.database import get_db
from ..core.errors import NotFoundError
from ..core.pipeline import pipeline
from ..core.validation import validate_task, validate_task_delete, validate_task_update
from ..models.task import Task
from ..schemas.task import (
    TaskCreate, TaskDelete, TaskPage, TaskResponse, TaskStatusOut, TaskStatusUpdate,
)
from ..schemas.user import Message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/taskNest", tags=["tasks"])

TASK_NOT_FOUND = "Task not found"


def owned_tasks(db: Session, user_id: int):
    """Query restricted to one user's tasks."""
    return db.query(Task).filter(Task.user_id == user_id)


@router.post("", response_model=Message, dependencies=pipeline(validate_task, authenticate))
def create_task(
    data: TaskCreate = Depends(validate_task),
    auth: AuthContext = Depends(authenticate),
    db: Session = Depends(get_db),
):
    """Create a new task for the authenticated user"""
    task = Task(text=data.text, user_id=auth.user_id)
    db.add(task)
    db.commit()
    logger.info(f"Task created by user {auth.user_id}")
    return {"message": "Task added"}


@router.get("", response_model=List[TaskResponse], dependencies=pipeline(authenticate))
def list_tasks(auth: AuthContext = Depends(authenticate), db: Session = Depends(get_db)):
    """All tasks of the authenticated user, oldest first"""
    return owned_tasks(db, auth.user_id).order_by(Task.id).all()


@router.get("/page", response_model=TaskPage, dependencies=pipeline(authenticate))
def list_tasks_page(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(10, ge=1, le=100, description="Tasks per page"),
    auth: AuthContext = Depends(authenticate),
    db: Session = Depends(get_db),
):
    """One page of the authenticated user's tasks"""
    query = owned_tasks(db, auth.user_id)
    total = query.count()
    tasks = query.order_by(Task.id).offset((page - 1) * limit).limit(limit).all()
    return TaskPage(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        total=total,
        page=page,
        pages=math.ceil(total / limit),
    )


@router.put("", response_model=TaskStatusOut, dependencies=pipeline(validate_task_update, authenticate))
def update_task_status(
    data: TaskStatusUpdate = Depends(validate_task_update),
    auth: AuthContext = Depends(authenticate),
    db: Session = Depends(get_db),
):
    """Mark a task done / not done"""
    updated = owned_tasks(db, auth.user_id).filter(Task.id == data.id).update(
        {Task.status: data.status}, synchronize_session=False
    )
    if not updated:
        db.rollback()
        logger.warning(f"Task {data.id} not found for user {auth.user_id}")
        raise NotFoundError(TASK_NOT_FOUND)

    db.commit()
    return {"status": data.status}


@router.delete("", response_model=Message, dependencies=pipeline(validate_task_delete, authenticate))
def delete_task(
    data: TaskDelete = Depends(validate_task_delete),
    auth: AuthContext = Depends(authenticate),
    db: Session = Depends(get_db),
):
    """Delete a task"""
    deleted = owned_tasks(db, auth.user_id).filter(Task.id == data.id).delete(
        synchronize_session=False
    )
    if not deleted:
        db.rollback()
        logger.warning(f"Task {data.id} not found for user {auth.user_id}")
        raise NotFoundError(TASK_NOT_FOUND)

    db.commit()
    logger.info(f"Task {data.id} deleted by user {auth.user_id}")
    return {"message": "Task deleted"}
