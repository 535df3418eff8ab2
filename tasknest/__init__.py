"""TaskNest - task management service with JWT authentication."""

__version__ = "1.0.0"
