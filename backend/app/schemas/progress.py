from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class StepProgressIn(BaseModel):
    progress: int
    completed: Optional[bool] = None
