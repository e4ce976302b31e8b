# Services module
from .task_store import TaskStore, TaskStoreError
from .task_collection import TaskCollection, TaskNotFound

__all__ = [
    "TaskStore",
    "TaskStoreError",
    "TaskCollection",
    "TaskNotFound",
]
