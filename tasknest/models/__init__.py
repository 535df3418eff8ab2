"""Database models for TaskNest."""
from .task import Task
from .user import User, UserRole

__all__ = ["Task", "User", "UserRole"]
