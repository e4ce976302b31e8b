"""
Persistent task row. The database assigns the id on insert.
"""
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from app.core.database import Base

# Largest value an Integer column holds on every supported backend
MAX_INTEGER = 2**31 - 1


class TaskRecord(Base):
    """Stored copy of a task."""

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("category BETWEEN 1 AND 4", name="ck_tasks_category_range"),
        CheckConstraint("duration > 0", name="ck_tasks_duration_positive"),
    )

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Basic Task Info
    name = Column(String(500), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    category = Column(Integer, nullable=False, index=True)  # 1-4 (Eisenhower quadrant)
    duration = Column(Integer, nullable=False)  # minutes

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<TaskRecord(id={self.id}, name='{self.name[:30]}...', category={self.category})>"
