from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.career_path import CareerPath
from app.models.skill import Skill, UserSkill
from app.models.user import User
from app.services.serializers import career_path_dict, iso, skill_dict, user_skill_dict


def list_skills(db: Session) -> List[Dict[str, Any]]:
    return [skill_dict(s) for s in db.query(Skill).order_by(Skill.id.asc()).all()]


def list_career_paths(db: Session) -> List[Dict[str, Any]]:
    return [career_path_dict(cp) for cp in db.query(CareerPath).order_by(CareerPath.id.asc()).all()]


def list_user_skills(db: Session, user_id: int) -> List[Dict[str, Any]]:
    """Ratings of a user, each with ``skill_details`` (``None`` for a deleted skill)."""
    rows = (
        db.query(UserSkill, Skill)
        .outerjoin(Skill, Skill.id == UserSkill.skill_id)
        .filter(UserSkill.user_id == int(user_id))
        .order_by(UserSkill.skill_id.asc())
        .all()
    )
    return [
        {**user_skill_dict(us), "skill_details": skill_dict(s) if s is not None else None}
        for us, s in rows
    ]


def get_user(db: Session, user_id: int) -> Dict[str, Any]:
    user = db.get(User, int(user_id))
    if not user:
        raise NotFoundError("User not found", details={"user_id": int(user_id)})
    return {
        "id": int(user.id),
        "username": user.username,
        "full_name": user.full_name,
        "created_at": iso(user.created_at),
    }
