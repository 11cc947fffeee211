"""Plain-dict views of model rows, shared by the services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.models.career_path import CareerPath, RoadmapStep
from app.models.resource import Resource
from app.models.skill import Skill, UserSkill
from app.models.task import Task
from app.models.user_goal import UserGoal


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything stored is UTC.
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso(dt: Optional[datetime]) -> Optional[str]:
    dt = as_utc(dt)
    return dt.isoformat() if dt else None


def skill_dict(s: Skill) -> Dict[str, Any]:
    return {"id": int(s.id), "name": s.name, "description": s.description or "", "category": s.category}


def user_skill_dict(us: UserSkill) -> Dict[str, Any]:
    return {
        "id": int(us.id),
        "user_id": int(us.user_id),
        "skill_id": int(us.skill_id),
        "proficiency_level": int(us.proficiency_level),
    }


def career_path_dict(cp: CareerPath) -> Dict[str, Any]:
    return {
        "id": int(cp.id),
        "title": cp.title,
        "description": cp.description or "",
        "required_skills": [int(x) for x in (cp.required_skills or [])],
    }


def step_dict(step: RoadmapStep) -> Dict[str, Any]:
    return {
        "id": int(step.id),
        "career_path_id": int(step.career_path_id),
        "title": step.title,
        "description": step.description or "",
        "order": int(step.order or 0),
        "required_skills": [int(x) for x in (step.required_skills or [])],
    }


def goal_dict(goal: UserGoal) -> Dict[str, Any]:
    return {
        "id": int(goal.id),
        "user_id": int(goal.user_id),
        "career_path_id": int(goal.career_path_id),
        "is_active": bool(goal.is_active),
    }


def resource_dict(r: Resource) -> Dict[str, Any]:
    return {
        "id": int(r.id),
        "title": r.title,
        "description": r.description,
        "provider": r.provider,
        "url": r.url,
        "type": r.type,
        "rating": r.rating,
        "duration": r.duration,
        "skill_ids": [int(x) for x in (r.skill_ids or [])],
    }


def task_dict(t: Task) -> Dict[str, Any]:
    return {
        "id": int(t.id),
        "user_id": int(t.user_id),
        "title": t.title,
        "description": t.description or "",
        "due_date": iso(t.due_date),
        "priority": getattr(t.priority, "value", t.priority),
        "status": getattr(t.status, "value", t.status),
        "completed": bool(t.completed),
        "related_resource_id": int(t.related_resource_id) if t.related_resource_id is not None else None,
        "related_step_id": int(t.related_step_id) if t.related_step_id is not None else None,
    }
