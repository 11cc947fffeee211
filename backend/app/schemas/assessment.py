from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SkillRatingIn(BaseModel):
    skill_id: int
    # Range (1..5) is checked by the assessment service so the whole batch is rejected at once.
    proficiency_level: int


class AssessmentIn(BaseModel):
    skills_assessment: List[SkillRatingIn] = Field(default_factory=list)
    # Career path id to set as the active goal
    career_goal: Optional[int] = None


class GoalIn(BaseModel):
    career_path_id: int
