"""
Task entity with Eisenhower matrix classification and ordering keys.
"""
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Callable, Optional


class InvalidArgument(ValueError):
    """Raised when a task attribute violates its invariant."""


class EisenhowerQuadrant(IntEnum):
    """Eisenhower matrix quadrants (smaller number = higher priority)."""
    DO_FIRST = 1  # Important & Urgent
    SCHEDULE = 2  # Important, Not Urgent
    DELEGATE = 3  # Not Important, Urgent
    ELIMINATE = 4  # Neither

    @property
    def important(self) -> bool:
        return self in (EisenhowerQuadrant.DO_FIRST, EisenhowerQuadrant.SCHEDULE)

    @property
    def urgent(self) -> bool:
        return self in (EisenhowerQuadrant.DO_FIRST, EisenhowerQuadrant.DELEGATE)

    @property
    def label(self) -> str:
        return "{} & {}".format(
            "Important" if self.important else "Not Important",
            "Urgent" if self.urgent else "Not Urgent",
        )

    @classmethod
    def from_flags(cls, important: bool, urgent: bool) -> "EisenhowerQuadrant":
        """Map importance/urgency flags onto the 2x2 matrix."""
        if important:
            return cls.DO_FIRST if urgent else cls.SCHEDULE
        return cls.DELEGATE if urgent else cls.ELIMINATE


def _validate_category(category) -> int:
    if isinstance(category, bool) or not isinstance(category, int):
        raise InvalidArgument(f"Task category must be an integer, got {category!r}")
    if category < EisenhowerQuadrant.DO_FIRST or category > EisenhowerQuadrant.ELIMINATE:
        raise InvalidArgument("Task category must be between 1 and 4 inclusive")
    return int(category)


def _validate_duration(duration) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise InvalidArgument(f"Task duration must be an integer, got {duration!r}")
    if duration <= 0:
        raise InvalidArgument("Task duration must be greater than 0 minutes")
    return int(duration)


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Task:
    """
    A user's task in the Eisenhower matrix.

    Every field is read-only except `category`, which may be reassigned to
    reclassify the task. The id is assigned by the task store and is only
    carried here, never generated.
    """

    __slots__ = ("_name", "_due_date", "_category", "_duration", "_id")

    def __init__(self, name: str, due_date: datetime, category: int, duration: int, id: int):
        """
        Args:
            name: Task name
            due_date: When the task needs to be completed
            category: Quadrant in the Eisenhower matrix, from 1 to 4
            duration: How long the task will take to complete, in minutes
            id: Identifier assigned by the task store

        Raises:
            InvalidArgument: category outside 1-4 or duration not positive
        """
        if not isinstance(due_date, datetime):
            raise InvalidArgument(f"Task due date must be a datetime, got {due_date!r}")
        self._category = _validate_category(category)
        self._duration = _validate_duration(duration)
        self._name = name
        self._due_date = due_date
        self._id = id

    @property
    def name(self) -> str:
        return self._name

    @property
    def due_date(self) -> datetime:
        return self._due_date

    @property
    def category(self) -> int:
        """Quadrant number, from 1 (Important & Urgent) to 4 (Neither)."""
        return self._category

    @category.setter
    def category(self, category: int) -> None:
        # Not persisted here; callers propagate the change to the store.
        self._category = _validate_category(category)

    @property
    def duration(self) -> int:
        """Duration in minutes."""
        return self._duration

    @property
    def id(self) -> int:
        return self._id

    @property
    def quadrant(self) -> EisenhowerQuadrant:
        return EisenhowerQuadrant(self._category)

    def local_due_date(self) -> datetime:
        """Due date in the host's local timezone, as a naive datetime."""
        return _as_utc(self._due_date).astimezone().replace(tzinfo=None)

    def __eq__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return (
            self._id == other._id
            and self._name == other._name
            and self._due_date == other._due_date
            and self._category == other._category
            and self._duration == other._duration
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"<Task(id={self._id}, name='{self._name[:30]}', category={self._category}, "
            f"duration={self._duration}, due_date={self._due_date.isoformat()})>"
        )


# Ordering keys. Each is a total preorder; ties keep insertion order
# because sorted() is stable.

def by_category(task: Task) -> int:
    return task.category


def by_duration(task: Task) -> int:
    return task.duration


def by_due_date(task: Task) -> datetime:
    return _as_utc(task.due_date)


class TaskOrder(str, Enum):
    """Sort keys a caller can choose from, one per query."""
    CATEGORY = "category"
    DURATION = "duration"
    DUE_DATE = "due_date"

    @property
    def key(self) -> Callable[[Task], object]:
        return _ORDER_KEYS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "TaskOrder":
        """Accept 'due_date', 'dueDate' or 'due-date'; default to CATEGORY."""
        if not value:
            return cls.CATEGORY
        normalized = value.strip().lower().replace("-", "_")
        if normalized == "duedate":
            normalized = "due_date"
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidArgument(f"Unknown task order '{value}'") from None


_ORDER_KEYS = {
    TaskOrder.CATEGORY: by_category,
    TaskOrder.DURATION: by_duration,
    TaskOrder.DUE_DATE: by_due_date,
}
