"""
Persistence for task rows.

``TaskStore`` wraps one SQLAlchemy session and exposes the five data-access
operations the handlers need. It performs no validation of its own: callers
are expected to have checked that title and status are non-empty.

Update and delete run a single statement against ``id``; when no row
matches they succeed without touching anything, so callers must not read
success as proof that the task existed.
"""
import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.task import Task
from .exceptions import StorageError, TaskNotFoundError

logger = logging.getLogger(__name__)


class TaskStore:
    """SQL-backed store for Task entities"""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, title: str, description: str, status: str) -> Task:
        """Persist a new task and return it with its assigned id"""
        task = Task(title=title, description=description or "", status=status)
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert task into database: {e}")
            raise StorageError("create task", e) from e

        logger.info(f"Created task {task.id}")
        return task

    def fetch_all(self) -> List[Task]:
        """Return every stored task ordered by id"""
        try:
            return list(self.db.scalars(select(Task).order_by(Task.id)))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to retrieve tasks: {e}")
            raise StorageError("retrieve tasks", e) from e

    def fetch_by_id(self, task_id: int) -> Task:
        try:
            task = self.db.scalars(select(Task).where(Task.id == task_id)).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to retrieve task {task_id}: {e}")
            raise StorageError("retrieve task", e) from e

        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update(self, task_id: int, title: str, description: str, status: str) -> None:
        """Overwrite title, description and status of the matching row"""
        statement = (
            update(Task)
            .where(Task.id == task_id)
            .values(title=title, description=description or "", status=status)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task_id}: {e}")
            raise StorageError("update task", e) from e

        logger.debug(f"Update of task {task_id} affected {result.rowcount} row(s)")

    def delete(self, task_id: int) -> None:
        """Remove the matching row"""
        try:
            result = self.db.execute(delete(Task).where(Task.id == task_id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise StorageError("delete task", e) from e

        logger.debug(f"Delete of task {task_id} affected {result.rowcount} row(s)")
