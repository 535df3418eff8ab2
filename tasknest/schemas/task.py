"""
Pydantic schemas for task endpoints.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=500, description="Task text")


class TaskStatusUpdate(BaseModel):
    """Schema for marking a task done / not done"""
    id: int = Field(..., description="Task ID")
    status: bool = Field(..., description="Whether the task is done")


class TaskDelete(BaseModel):
    """Schema for deleting a task"""
    id: int = Field(..., description="Task ID")


class TaskResponse(BaseModel):
    """Schema for task response"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Task ID")
    user_id: int = Field(..., description="User ID who owns the task")
    text: str = Field(..., description="Task text")
    status: bool = Field(..., description="Whether the task is done")
    created_at: datetime = Field(..., description="Task creation timestamp")


class TaskStatusOut(BaseModel):
    status: bool


class TaskPage(BaseModel):
    """Schema for paginated task list"""
    tasks: List[TaskResponse] = Field(..., description="Tasks on this page")
    total: int = Field(..., description="Total number of tasks")
    page: int = Field(..., description="Current page, starting at 1")
    pages: int = Field(..., description="Total number of pages")
