"""Pydantic schemas for TaskNest."""
