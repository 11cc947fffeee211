from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.services.catalog_service import list_career_paths, list_skills
from app.services.roadmap_service import get_career_path, resolve_roadmap
from app.services.serializers import career_path_dict


router = APIRouter(tags=["catalog"])


@router.get("/skills")
def skills_list(request: Request, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": list_skills(db), "error": None}


@router.get("/career-paths")
def career_paths_list(request: Request, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": list_career_paths(db), "error": None}


@router.get("/career-paths/{career_path_id}")
def career_path_get(request: Request, career_path_id: int, db: Session = Depends(get_db)):
    cp = get_career_path(db, career_path_id)
    return {"request_id": request.state.request_id, "data": career_path_dict(cp), "error": None}


@router.get("/career-paths/{career_path_id}/roadmap")
def career_path_roadmap(request: Request, career_path_id: int, db: Session = Depends(get_db)):
    data = resolve_roadmap(db, career_path_id)
    return {"request_id": request.state.request_id, "data": data, "error": None}
