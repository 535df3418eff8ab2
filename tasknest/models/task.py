from sqlalchemy import Column, Integer, Text, Boolean, DateTime
from sqlalchemy.sql import func
from ..core.database import Base


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    status = Column(Boolean, default=False, nullable=False)

    # Owner reference only; users and tasks are deleted independently
    user_id = Column(Integer, nullable=False, index=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<Task(id={self.id}, user_id={self.user_id}, status={self.status})>"
