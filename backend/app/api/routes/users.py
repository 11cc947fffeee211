from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.assessment import AssessmentIn, GoalIn
from app.schemas.progress import StepProgressIn
from app.services.assessment_service import process_assessment, set_user_goal
from app.services.catalog_service import get_user, list_user_skills
from app.services.progress_service import aggregate_progress, get_user_goal, record_step_progress
from app.services.resource_service import recommend_resources


router = APIRouter(tags=["users"])


@router.get("/users/{user_id}")
def user_get(request: Request, user_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": get_user(db, user_id), "error": None}


@router.get("/users/{user_id}/skills")
def user_skills(request: Request, user_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": list_user_skills(db, user_id), "error": None}


@router.get("/users/{user_id}/goal")
def user_goal_get(request: Request, user_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": get_user_goal(db, user_id), "error": None}


@router.put("/users/{user_id}/goal")
def user_goal_set(request: Request, user_id: int, payload: GoalIn, db: Session = Depends(get_db)):
    data = set_user_goal(db, user_id=user_id, career_path_id=payload.career_path_id)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/users/{user_id}/progress")
def user_progress(request: Request, user_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": aggregate_progress(db, user_id), "error": None}


@router.put("/users/{user_id}/progress/{step_id}")
def user_step_progress(
    request: Request,
    user_id: int,
    step_id: int,
    payload: StepProgressIn,
    db: Session = Depends(get_db),
):
    data = record_step_progress(
        db,
        user_id=user_id,
        step_id=step_id,
        progress=payload.progress,
        completed=payload.completed,
    )
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.post("/users/{user_id}/assessment")
def user_assessment(request: Request, user_id: int, payload: AssessmentIn, db: Session = Depends(get_db)):
    data = process_assessment(
        db,
        user_id=user_id,
        skills_assessment=[r.model_dump() for r in payload.skills_assessment],
        career_goal=payload.career_goal,
    )
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/users/{user_id}/recommended-resources")
def user_recommended_resources(
    request: Request,
    user_id: int,
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    data = recommend_resources(db, user_id, limit=limit)
    return {"request_id": request.state.request_id, "data": data, "error": None}
