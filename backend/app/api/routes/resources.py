from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.errors import ValidationError
from app.services.resource_service import get_resource, list_resources, resources_for_skills


router = APIRouter(tags=["resources"])


def _parse_ids(raw: str) -> list[int]:
    try:
        ids = [int(x) for x in raw.split(",") if x.strip()]
    except ValueError:
        raise ValidationError("Invalid skill IDs", details={"skill_ids": raw}) from None
    if not ids:
        raise ValidationError("No skill IDs provided")
    return ids


@router.get("/resources")
def resources_list(
    request: Request,
    resource_type: str | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
):
    data = list_resources(db, resource_type=resource_type)
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.get("/resources/by-skills")
def resources_by_skills(request: Request, skill_ids: str, db: Session = Depends(get_db)):
    data = resources_for_skills(db, _parse_ids(skill_ids))
    return {"request_id": request.state.request_id, "data": data, "error": None}


# Declared after /resources/by-skills so the literal path wins.
@router.get("/resources/{resource_id}")
def resource_get(request: Request, resource_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": get_resource(db, resource_id), "error": None}
