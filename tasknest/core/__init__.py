"""Core modules for TaskNest."""
