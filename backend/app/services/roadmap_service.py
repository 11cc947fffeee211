from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.career_path import CareerPath, RoadmapStep
from app.models.skill import Skill
from app.services.serializers import career_path_dict, skill_dict, step_dict

logger = logging.getLogger(__name__)


def get_career_path(db: Session, career_path_id: int) -> CareerPath:
    cp = db.get(CareerPath, int(career_path_id))
    if not cp:
        raise NotFoundError("Career path not found", details={"career_path_id": int(career_path_id)})
    return cp


def list_roadmap_steps(db: Session, career_path_id: int) -> List[RoadmapStep]:
    return (
        db.query(RoadmapStep)
        .filter(RoadmapStep.career_path_id == int(career_path_id))
        .order_by(RoadmapStep.order.asc(), RoadmapStep.id.asc())
        .all()
    )


def resolve_roadmap(db: Session, career_path_id: int) -> Dict[str, Any]:
    """Career path plus its steps (by ``order``), each with full skill records.

    ``skills`` follows the step's ``required_skills`` order. An id whose skill
    row is gone shows up as ``None`` in its slot instead of failing the read.
    """
    cp = get_career_path(db, career_path_id)
    steps = list_roadmap_steps(db, cp.id)

    wanted = {int(sid) for step in steps for sid in (step.required_skills or [])}
    skills: Dict[int, Skill] = {}
    if wanted:
        skills = {int(s.id): s for s in db.query(Skill).filter(Skill.id.in_(wanted)).all()}

    missing = wanted - set(skills)
    if missing:
        logger.warning("Roadmap for career path %s references missing skills %s", cp.id, sorted(missing))

    out_steps: List[Dict[str, Any]] = []
    for step in steps:
        item = step_dict(step)
        item["skills"] = [
            skill_dict(skills[int(sid)]) if int(sid) in skills else None
            for sid in (step.required_skills or [])
        ]
        out_steps.append(item)

    return {"career_path": career_path_dict(cp), "steps": out_steps}
