# Domain and database models
from app.models.task import Task, TaskOrder, EisenhowerQuadrant, InvalidArgument
from app.models.task_record import TaskRecord

__all__ = ["Task", "TaskOrder", "EisenhowerQuadrant", "InvalidArgument", "TaskRecord"]
