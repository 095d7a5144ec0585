"""
Pydantic schemas for task endpoints.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STATUS = "pending"


class TaskCreate(BaseModel):
    customer_id: int | None = None
    assigned_to: int | None = None
    task_description: str | None = None
    due_date: date | None = None
    status: str | None = Field(default=None, max_length=50)


class TaskUpdate(TaskCreate):
    model_config = ConfigDict(extra="forbid")
