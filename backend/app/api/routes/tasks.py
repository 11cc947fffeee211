from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.tasks import TaskCreateIn, TaskUpdateIn
from app.services.task_service import create_task, delete_task, derive_tasks, update_task


router = APIRouter(tags=["tasks"])


@router.get("/users/{user_id}/tasks")
def tasks_list(request: Request, user_id: int, db: Session = Depends(get_db)):
    return {"request_id": request.state.request_id, "data": derive_tasks(db, user_id), "error": None}


@router.post("/users/{user_id}/tasks", status_code=201)
def tasks_create(request: Request, user_id: int, payload: TaskCreateIn, db: Session = Depends(get_db)):
    data = create_task(db, user_id=user_id, fields=payload.model_dump(exclude_none=True))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.patch("/tasks/{task_id}")
def tasks_update(request: Request, task_id: int, payload: TaskUpdateIn, db: Session = Depends(get_db)):
    data = update_task(db, task_id, payload.model_dump(exclude_unset=True))
    return {"request_id": request.state.request_id, "data": data, "error": None}


@router.delete("/tasks/{task_id}", status_code=204)
def tasks_delete(task_id: int, db: Session = Depends(get_db)):
    delete_task(db, task_id)
    return Response(status_code=204)
