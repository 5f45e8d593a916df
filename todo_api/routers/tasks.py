import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Task as TaskModel
from ..schemas.task import (
    TITLE_MAX_LENGTH,
    ErrorResponse,
    Task as TaskSchema,
    TaskCompleteResponse,
    TaskCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RECENT_TASKS_LIMIT = 5
# Largest signed 64-bit integer, the widest id any supported store assigns
MAX_TASK_ID = 2 ** 63 - 1


def _store_error(db: Session, message: str) -> HTTPException:
    """Log the current store error, roll back and build the generic 500."""
    logger.exception(message)
    try:
        db.rollback()
    except SQLAlchemyError:
        # The response for the original error still stands
        logger.warning("Rollback after store error failed", exc_info=True)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _validate_title(task: Optional[TaskCreate]) -> str:
    title = task.title if task is not None else None
    if title is None or not title.strip():
        logger.debug("Rejected task without a title")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Title must be at most {TITLE_MAX_LENGTH} characters",
        )
    return title


def _parse_task_id(task_id: str) -> Optional[int]:
    """Return the row id, or None when no row can carry it."""
    if not (task_id.isascii() and task_id.isdigit()):
        return None
    row_id = int(task_id)
    if row_id < 1 or row_id > MAX_TASK_ID:
        return None
    return row_id


@router.get(
    "/tasks",
    response_model=List[TaskSchema],
    responses={500: {"model": ErrorResponse}},
)
def get_tasks(db: Session = Depends(get_db)):
    """Get the most recent incomplete tasks, newest first.

    ``id`` is assigned in insertion order, so it orders the same way as
    ``created_at`` without ties.
    """
    try:
        return (
            db.query(TaskModel)
            .filter(TaskModel.is_completed.is_(False))
            .order_by(TaskModel.id.desc())
            .limit(RECENT_TASKS_LIMIT)
            .all()
        )
    except SQLAlchemyError:
        raise _store_error(db, "Error fetching tasks")


@router.post(
    "/tasks",
    response_model=TaskSchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_task(task: Optional[TaskCreate] = None, db: Session = Depends(get_db)):
    """Create a new task.

    Validation happens before the session touches the store. The row is read
    back before the commit, so a failed read leaves nothing behind.
    """
    title = _validate_title(task)

    db_task = TaskModel(title=title, description=task.description or None)
    try:
        db.add(db_task)
        db.flush()
        db.refresh(db_task)
        created = TaskSchema.model_validate(db_task)
        db.commit()
    except SQLAlchemyError:
        raise _store_error(db, "Error adding task")

    logger.info("Created task id=%s", created.id)
    return created


@router.put(
    "/tasks/{task_id}/complete",
    response_model=TaskCompleteResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def mark_task_complete(task_id: str, db: Session = Depends(get_db)):
    """Mark a task as complete.

    The update reports matched rows, so completing an already completed task
    succeeds again.
    """
    row_id = _parse_task_id(task_id)
    if row_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    try:
        matched = (
            db.query(TaskModel)
            .filter(TaskModel.id == row_id)
            .update({TaskModel.is_completed: True}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        raise _store_error(db, "Error marking task complete")

    if matched == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    logger.info("Completed task id=%s", row_id)
    return TaskCompleteResponse()
