from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


Priority = Literal["low", "medium", "high"]
Status = Literal["not_started", "in_progress", "completed"]


class TaskCreateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str = ""
    due_date: datetime
    priority: Priority = "medium"
    status: Optional[Status] = None
    completed: Optional[bool] = None
    related_resource_id: Optional[int] = None
    related_step_id: Optional[int] = None


class TaskUpdateIn(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[Priority] = None
    status: Optional[Status] = None
    completed: Optional[bool] = None
    related_resource_id: Optional[int] = None
    related_step_id: Optional[int] = None
