"""
In-memory task collection mirroring the task store.

Writes go to the store first and to memory second, so a store failure leaves
memory untouched. `load()` rebuilds memory from the store when the two may
have drifted apart.
"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional, Union

from app.models.task import Task, TaskOrder, InvalidArgument
from app.services.task_store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)

# Placeholder id for validation before the store has assigned a real one
_UNSAVED_ID = -1


class TaskNotFound(LookupError):
    """No task with the requested id."""


class TaskCollection:
    """
    Set of tasks keyed by id.

    Mutations are serialized through one asyncio.Lock; reads return
    snapshots and never block on the lock.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self._tasks: Dict[int, Task] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id) -> bool:
        return task_id in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def get(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    def add(self, name: str, due_date: datetime, category: int, duration: int, id: int) -> Task:
        """
        Build a task and insert it in memory. Does not write to the store.

        Raises:
            InvalidArgument: category or duration out of range
        """
        task = Task(name, due_date, category, duration, id)
        if task.id in self._tasks:
            logger.warning(f"Replacing task {task.id} already in the collection")
        self._tasks[task.id] = task
        return task

    def list_sorted_by(self, order: Union[TaskOrder, Callable[[Task], object]]) -> List[Task]:
        """Snapshot of the collection sorted by a single key."""
        key = order.key if isinstance(order, TaskOrder) else order
        return sorted(self._tasks.values(), key=key)

    async def create(self, name: str, due_date: datetime, category: int, duration: int) -> Task:
        """
        Validate, store, then insert a new task.

        Raises:
            InvalidArgument: invalid fields (nothing is stored)
            TaskStoreError: the store rejected the write (memory unchanged)
        """
        Task(name, due_date, category, duration, _UNSAVED_ID)

        async with self._lock:
            task_id = await self.store.put(name, due_date, category, duration)
            try:
                task = self.add(name, due_date, category, duration, task_id)
            except Exception:
                logger.error(f"Rolling back stored task {task_id}: in-memory insert failed")
                try:
                    await self.store.delete(task_id)
                except TaskStoreError as e:
                    logger.error(f"Rollback of stored task {task_id} failed: {e}")
                raise

        logger.info(f"Created task {task.id} in quadrant {task.category}")
        return task

    async def remove(self, task_id: int) -> int:
        """
        Delete a task from the store and from memory.

        Unknown ids are a no-op.

        Returns:
            int: number of in-memory tasks removed
        """
        async with self._lock:
            await self.store.delete(task_id)
            removed = [t for t in self._tasks.values() if t.id == task_id]
            for task in removed:
                del self._tasks[task.id]

        if removed:
            logger.info(f"Removed task {task_id}")
        else:
            logger.debug(f"Remove of unknown task {task_id} ignored")
        return len(removed)

    async def reclassify(self, task_id: int, category: int) -> Task:
        """
        Move a task to another quadrant, in the store and in memory.

        Raises:
            TaskNotFound: no task with this id
            InvalidArgument: category out of range (nothing changes)
        """
        async with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFound(f"Task {task_id} not found")

            # Validate before touching the store
            Task(task.name, task.due_date, category, task.duration, task.id)

            if not await self.store.update_category(task_id, category):
                raise TaskNotFound(f"Task {task_id} not found in store")
            task.category = category

        logger.info(f"Task {task_id} reclassified to quadrant {category}")
        return task

    async def load(self) -> int:
        """
        Replace memory with the store's contents.

        Rows that fail validation are skipped and logged.

        Returns:
            int: number of tasks loaded
        """
        async with self._lock:
            records = await self.store.query("created_at", descending=False)

            loaded: Dict[int, Task] = {}
            for record in records:
                try:
                    loaded[record.id] = Task(
                        record.name, record.due_date, record.category, record.duration, record.id
                    )
                except InvalidArgument as e:
                    logger.warning(f"Skipping stored task {record.id}: {e}")

            self._tasks = loaded

        logger.info(f"Loaded {len(loaded)} tasks from store")
        return len(loaded)
