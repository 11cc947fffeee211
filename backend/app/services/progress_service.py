from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, StoreFailure, ValidationError
from app.db.upsert import atomic_upsert
from app.models.career_path import CareerPath, RoadmapStep
from app.models.skill import UserSkill
from app.models.user_goal import UserGoal
from app.models.user_progress import UserProgress
from app.services.roadmap_service import resolve_roadmap
from app.services.serializers import as_utc, career_path_dict, goal_dict, iso
from app.services.user_service import ensure_user_exists

logger = logging.getLogger(__name__)


def get_active_goal(db: Session, user_id: int) -> UserGoal:
    goal = (
        db.query(UserGoal)
        .filter(UserGoal.user_id == int(user_id), UserGoal.is_active.is_(True))
        .first()
    )
    if not goal:
        raise NotFoundError("No active goal", details={"user_id": int(user_id)})
    return goal


def get_user_goal(db: Session, user_id: int) -> Dict[str, Any]:
    """User goal with the career path embedded (``None`` if the path row is gone)."""
    goal = db.query(UserGoal).filter(UserGoal.user_id == int(user_id)).first()
    if not goal:
        raise NotFoundError("User goal not found", details={"user_id": int(user_id)})
    cp = db.get(CareerPath, int(goal.career_path_id))
    return {**goal_dict(goal), "career_path": career_path_dict(cp) if cp else None}


def step_status(progress: int, completed: bool) -> str:
    if completed:
        return "complete"
    if progress > 0:
        return "active"
    return "incomplete"


def average_progress(total: int, steps: int) -> int:
    """round(total / steps) with halves rounded up; 0 for an empty roadmap."""
    if steps <= 0:
        return 0
    return (2 * int(total) + steps) // (2 * steps)


def aggregate_progress(db: Session, user_id: int) -> Dict[str, Any]:
    """Overall completion, dashboard stats and per-step details for the active goal.

    The average runs over every roadmap step, including steps without a
    progress row (counted as 0), so untouched steps pull the number down.
    Read-only.
    """
    goal = get_active_goal(db, user_id)
    roadmap = resolve_roadmap(db, goal.career_path_id)
    steps = roadmap["steps"]

    step_ids = [s["id"] for s in steps]
    rows: Dict[int, UserProgress] = {}
    if step_ids:
        rows = {
            int(r.roadmap_step_id): r
            for r in db.query(UserProgress)
            .filter(UserProgress.user_id == int(user_id), UserProgress.roadmap_step_id.in_(step_ids))
            .all()
        }

    details = []
    for step in steps:
        row = rows.get(step["id"])
        progress = int(row.progress) if row else 0
        completed = bool(row.completed) if row else False
        details.append(
            {
                **step,
                "progress": progress,
                "completed": completed,
                "completed_date": iso(row.completed_date) if row else None,
                "status": step_status(progress, completed),
            }
        )

    total = sum(d["progress"] for d in details)
    completed_steps = sum(1 for d in details if d["completed"])

    acquired = (
        db.query(func.count(UserSkill.id))
        .filter(UserSkill.user_id == int(user_id), UserSkill.proficiency_level >= settings.ACQUIRED_SKILL_LEVEL)
        .scalar()
    )

    # Distinct ISO weeks with at least one completed step.
    weeks = {
        as_utc(r.completed_date).isocalendar()[:2]
        for r in rows.values()
        if r.completed and r.completed_date is not None
    }

    return {
        "overall_progress": average_progress(total, len(details)),
        "stats": {
            "acquired_skills": int(acquired or 0),
            "completed_courses": completed_steps * settings.COURSES_PER_COMPLETED_STEP,
            "completed_projects": completed_steps * settings.PROJECTS_PER_COMPLETED_STEP,
            "completed_steps": completed_steps,
            "total_steps": len(details),
            "weeks_consistent": len(weeks),
        },
        "progress_details": details,
    }


def record_step_progress(
    db: Session,
    *,
    user_id: int,
    step_id: int,
    progress: int,
    completed: Optional[bool] = None,
) -> Dict[str, Any]:
    """Create or update the user's progress on one roadmap step.

    ``completed`` forces progress to 100 and progress 100 marks the step
    completed. ``completed_date`` is kept from the first completion and
    cleared when the step is reopened.
    """
    if isinstance(progress, bool) or not isinstance(progress, int) or not 0 <= progress <= 100:
        raise ValidationError("progress must be an integer between 0 and 100", details={"progress": progress})

    step = db.get(RoadmapStep, int(step_id))
    if not step:
        raise NotFoundError("Roadmap step not found", details={"step_id": int(step_id)})

    done = bool(completed) or progress == 100
    if done:
        progress = 100

    existing = (
        db.query(UserProgress)
        .filter(UserProgress.user_id == int(user_id), UserProgress.roadmap_step_id == int(step_id))
        .first()
    )
    completed_date = None
    if done:
        if existing and existing.completed and existing.completed_date is not None:
            completed_date = existing.completed_date
        else:
            completed_date = datetime.now(timezone.utc)

    try:
        ensure_user_exists(db, user_id)
        atomic_upsert(
            db,
            UserProgress,
            conflict_cols=("user_id", "roadmap_step_id"),
            values={
                "user_id": int(user_id),
                "roadmap_step_id": int(step_id),
                "progress": int(progress),
                "completed": done,
                "completed_date": completed_date,
            },
            update_cols=("progress", "completed", "completed_date"),
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to record progress") from exc

    logger.info("Recorded progress user=%s step=%s progress=%s completed=%s", user_id, step_id, progress, done)
    return {
        "user_id": int(user_id),
        "roadmap_step_id": int(step_id),
        "progress": int(progress),
        "completed": done,
        "completed_date": iso(completed_date),
        "status": step_status(int(progress), done),
    }
