from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StoreFailure, ValidationError
from app.db.upsert import atomic_upsert
from app.models.career_path import CareerPath
from app.models.skill import Skill, UserSkill
from app.models.user_goal import UserGoal
from app.services.user_service import ensure_user_exists

logger = logging.getLogger(__name__)

MIN_PROFICIENCY = 1
MAX_PROFICIENCY = 5


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None


def _validate_ratings(skills_assessment: Iterable[Any]) -> Dict[int, int]:
    """Check every rating before anything is written.

    Returns ``{skill_id: level}``; a skill rated twice keeps the last rating.
    """
    if skills_assessment is None or isinstance(skills_assessment, (str, bytes, Mapping)):
        raise ValidationError("skills_assessment must be a list of ratings")

    ratings: Dict[int, int] = {}
    errors: List[Dict[str, Any]] = []
    for idx, item in enumerate(skills_assessment):
        if not isinstance(item, Mapping):
            errors.append({"index": idx, "reason": "rating must be an object"})
            continue
        skill_id = _as_int(item.get("skill_id"))
        level = _as_int(item.get("proficiency_level"))
        if skill_id is None:
            errors.append({"index": idx, "reason": "skill_id must be an integer"})
            continue
        if level is None or not MIN_PROFICIENCY <= level <= MAX_PROFICIENCY:
            errors.append(
                {
                    "index": idx,
                    "skill_id": skill_id,
                    "reason": f"proficiency_level must be between {MIN_PROFICIENCY} and {MAX_PROFICIENCY}",
                }
            )
            continue
        ratings[skill_id] = level

    if errors:
        raise ValidationError("Invalid skills assessment", details={"errors": errors})
    return ratings


def _upsert_goal(db: Session, user_id: int, career_path_id: int) -> None:
    atomic_upsert(
        db,
        UserGoal,
        conflict_cols=("user_id",),
        values={
            "user_id": int(user_id),
            "career_path_id": int(career_path_id),
            "is_active": True,
            "updated_at": func.now(),
        },
        update_cols=("career_path_id", "is_active", "updated_at"),
    )


def _require_career_path(db: Session, career_path_id: Any) -> int:
    cid = _as_int(career_path_id)
    if cid is None:
        raise ValidationError("career_goal must be an integer career path id")
    if not db.get(CareerPath, cid):
        raise NotFoundError("Career path not found", details={"career_path_id": cid})
    return cid


def set_user_goal(db: Session, *, user_id: int, career_path_id: int) -> Dict[str, Any]:
    """Point the user's single goal row at ``career_path_id`` and make it active."""
    cid = _require_career_path(db, career_path_id)
    try:
        ensure_user_exists(db, user_id)
        _upsert_goal(db, user_id, cid)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to save user goal") from exc

    logger.info("Set goal user=%s career_path=%s", user_id, cid)
    goal = db.query(UserGoal).filter(UserGoal.user_id == int(user_id)).one()
    return {"id": int(goal.id), "user_id": int(user_id), "career_path_id": cid, "is_active": True}


def process_assessment(
    db: Session,
    *,
    user_id: int,
    skills_assessment: Iterable[Any],
    career_goal: Optional[int] = None,
) -> Dict[str, Any]:
    """Apply a batch self-assessment and optional career goal.

    Each rating is an upsert keyed on (user, skill), so resubmitting never
    duplicates rows. The whole batch is validated first; one bad rating
    rejects everything. All writes share one commit.
    """
    ratings = _validate_ratings(skills_assessment)

    if ratings:
        known = {int(sid) for (sid,) in db.query(Skill.id).filter(Skill.id.in_(list(ratings))).all()}
        unknown = sorted(set(ratings) - known)
        if unknown:
            raise NotFoundError("Unknown skills in assessment", details={"skill_ids": unknown})

    cid = _require_career_path(db, career_goal) if career_goal is not None else None

    try:
        ensure_user_exists(db, user_id)
        for skill_id in sorted(ratings):
            atomic_upsert(
                db,
                UserSkill,
                conflict_cols=("user_id", "skill_id"),
                values={
                    "user_id": int(user_id),
                    "skill_id": int(skill_id),
                    "proficiency_level": int(ratings[skill_id]),
                    "updated_at": func.now(),
                },
                update_cols=("proficiency_level", "updated_at"),
            )
        if cid is not None:
            _upsert_goal(db, user_id, cid)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to process assessment") from exc

    logger.info("Assessment applied user=%s skills=%s career_goal=%s", user_id, len(ratings), cid)
    return {
        "message": "Assessment completed successfully",
        "skills_updated": len(ratings),
        "career_goal": cid,
    }
