"""
Task store: the durable copy of every task.

Each call opens its own session and commits, so a single put/delete/update
is atomic. Nothing spans more than one call.
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy import select, delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.task_record import MAX_INTEGER, TaskRecord

logger = logging.getLogger(__name__)


class TaskStoreError(RuntimeError):
    """The store is unavailable or rejected a write."""


SORTABLE_FIELDS = {
    "id": TaskRecord.id,
    "name": TaskRecord.name,
    "due_date": TaskRecord.due_date,
    "category": TaskRecord.category,
    "duration": TaskRecord.duration,
    "created_at": TaskRecord.created_at,
}


def _storable_id(task_id: int) -> bool:
    """Ids outside the column range can never match a row."""
    return 0 < task_id <= MAX_INTEGER


class TaskStore:
    """Persistent store client backed by SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def put(self, name: str, due_date: datetime, category: int, duration: int) -> int:
        """
        Insert a task row.

        Returns:
            int: id assigned by the database
        """
        record = TaskRecord(name=name, due_date=due_date, category=category, duration=duration)
        try:
            async with self.session_factory() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store task '{name}': {e}")
            raise TaskStoreError(f"Failed to store task: {e}") from e
        return record.id

    async def delete(self, task_id: int) -> bool:
        """Delete the row with this id. Returns False if nothing matched."""
        if not _storable_id(task_id):
            return False
        try:
            async with self.session_factory() as session:
                result = await session.execute(delete(TaskRecord).where(TaskRecord.id == task_id))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise TaskStoreError(f"Failed to delete task {task_id}: {e}") from e
        return result.rowcount > 0

    async def update_category(self, task_id: int, category: int) -> bool:
        """Set the category on a stored task. Returns False if nothing matched."""
        if not _storable_id(task_id):
            return False
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    update(TaskRecord).where(TaskRecord.id == task_id).values(category=category)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update category of task {task_id}: {e}")
            raise TaskStoreError(f"Failed to update task {task_id}: {e}") from e
        return result.rowcount > 0

    async def query(self, order_by: str = "created_at", descending: bool = True) -> List[TaskRecord]:
        """
        Fetch every stored task sorted by one column.

        Args:
            order_by: one of SORTABLE_FIELDS
            descending: sort direction

        Raises:
            ValueError: unknown sort field
        """
        column = SORTABLE_FIELDS.get(order_by)
        if column is None:
            raise ValueError(f"Cannot sort tasks by '{order_by}'")

        stmt = select(TaskRecord).order_by(column.desc() if descending else column.asc(), TaskRecord.id)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to query tasks: {e}")
            raise TaskStoreError(f"Failed to query tasks: {e}") from e
