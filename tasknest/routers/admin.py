import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, authenticate, require_permission
from ..core.database import get_db
from ..core.pipeline import pipeline
from ..models.task import Task
from ..models.user import User
from ..schemas.task import TaskResponse
from ..schemas.user import UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get(
    "/users",
    response_model=List[UserOut],
    dependencies=pipeline(authenticate, require_permission("users:read")),
)
def list_all_users(auth: AuthContext = Depends(authenticate), db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.id).all()
    logger.info(f"Admin {auth.user_id} fetched all users")
    return users


@router.get(
    "/tasks",
    response_model=List[TaskResponse],
    dependencies=pipeline(authenticate, require_permission("tasks:manage")),
)
def list_all_tasks(auth: AuthContext = Depends(authenticate), db: Session = Depends(get_db)):
    tasks = db.query(Task).order_by(Task.id).all()
    logger.info(f"Admin {auth.user_id} fetched all tasks")
    return tasks
