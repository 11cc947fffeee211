from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.models.career_path import CareerPath
from app.models.resource import Resource
from app.models.skill import UserSkill
from app.models.user_goal import UserGoal
from app.services.serializers import resource_dict


def list_resources(db: Session, *, resource_type: Optional[str] = None) -> List[Dict[str, Any]]:
    q = db.query(Resource)
    if resource_type:
        q = q.filter(Resource.type == str(resource_type))
    return [resource_dict(r) for r in q.order_by(Resource.id.asc()).all()]


def get_resource(db: Session, resource_id: int) -> Dict[str, Any]:
    r = db.get(Resource, int(resource_id))
    if not r:
        raise NotFoundError("Resource not found", details={"resource_id": int(resource_id)})
    return resource_dict(r)


def _matching(resources: Iterable[Resource], skill_ids: set[int]) -> List[Resource]:
    return [r for r in resources if skill_ids.intersection(int(x) for x in (r.skill_ids or []))]


def resources_for_skills(db: Session, skill_ids: Iterable[int]) -> List[Dict[str, Any]]:
    """Resources teaching at least one of ``skill_ids``."""
    wanted = {int(x) for x in skill_ids}
    if not wanted:
        return []
    # skill_ids is a JSON list; filtering happens in Python to stay dialect neutral.
    rows = db.query(Resource).order_by(Resource.id.asc()).all()
    return [resource_dict(r) for r in _matching(rows, wanted)]


def recommend_resources(db: Session, user_id: int, *, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Resources for the user's dashboard.

    Resources covering goal skills the user has not acquired yet come first,
    then anything related to skills the user has rated.
    """
    if limit is None:
        limit = settings.RECOMMENDED_RESOURCES_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("limit must be a positive integer", details={"limit": limit})
    user_skills = db.query(UserSkill).filter(UserSkill.user_id == int(user_id)).all()
    rated = {int(us.skill_id) for us in user_skills}
    acquired = {int(us.skill_id) for us in user_skills if int(us.proficiency_level) >= settings.ACQUIRED_SKILL_LEVEL}

    gaps: set[int] = set()
    goal = db.query(UserGoal).filter(UserGoal.user_id == int(user_id), UserGoal.is_active.is_(True)).first()
    if goal:
        cp = db.get(CareerPath, int(goal.career_path_id))
        if cp:
            gaps = {int(x) for x in (cp.required_skills or [])} - acquired

    rows = db.query(Resource).order_by(Resource.id.asc()).all()
    picked: List[Resource] = []
    seen: set[int] = set()
    for bucket in (_matching(rows, gaps), _matching(rows, rated)):
        for r in bucket:
            if int(r.id) in seen:
                continue
            seen.add(int(r.id))
            picked.append(r)
    return [resource_dict(r) for r in picked[:limit]]
