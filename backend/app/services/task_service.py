from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StoreFailure, ValidationError
from app.models.career_path import RoadmapStep
from app.models.resource import Resource
from app.models.task import Task, TaskPriority, TaskStatus
from app.services.serializers import as_utc, resource_dict, step_dict, task_dict
from app.services.user_service import ensure_user_exists

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

UPDATABLE_FIELDS = {
    "title",
    "description",
    "due_date",
    "priority",
    "status",
    "completed",
    "related_resource_id",
    "related_step_id",
}


def days_left(due_date: datetime, now: Optional[datetime] = None) -> int:
    """Whole days until ``due_date``, rounded up.

    Negative means overdue, 0 due today, positive days remaining.
    """
    now = as_utc(now) or datetime.now(timezone.utc)
    delta = as_utc(due_date) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def derive_tasks(db: Session, user_id: int, *, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """User tasks with linked resource/step attached and ``days_left`` computed.

    A link pointing at a row that no longer exists is left out of the
    output rather than failing the listing.
    """
    now = as_utc(now) or datetime.now(timezone.utc)
    tasks = (
        db.query(Task)
        .filter(Task.user_id == int(user_id))
        .order_by(Task.due_date.asc(), Task.id.asc())
        .all()
    )

    resource_ids = {int(t.related_resource_id) for t in tasks if t.related_resource_id is not None}
    step_ids = {int(t.related_step_id) for t in tasks if t.related_step_id is not None}
    resources = {int(r.id): r for r in db.query(Resource).filter(Resource.id.in_(resource_ids)).all()} if resource_ids else {}
    steps = {int(s.id): s for s in db.query(RoadmapStep).filter(RoadmapStep.id.in_(step_ids)).all()} if step_ids else {}

    out: List[Dict[str, Any]] = []
    for t in tasks:
        item = task_dict(t)
        if t.related_resource_id is not None:
            res = resources.get(int(t.related_resource_id))
            if res:
                item["resource"] = resource_dict(res)
            else:
                logger.warning("Task %s links missing resource %s", t.id, t.related_resource_id)
        if t.related_step_id is not None:
            step = steps.get(int(t.related_step_id))
            if step:
                item["step"] = step_dict(step)
            else:
                logger.warning("Task %s links missing roadmap step %s", t.id, t.related_step_id)
        item["days_left"] = days_left(t.due_date, now)
        out.append(item)
    return out


def _enum_value(enum_cls, value: Any, field: str):
    try:
        return enum_cls(getattr(value, "value", value))
    except ValueError:
        allowed = [e.value for e in enum_cls]
        raise ValidationError(f"Invalid {field}", details={field: value, "allowed": allowed}) from None


def _parse_due_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value))
        except ValueError:
            pass
    raise ValidationError("due_date must be an ISO-8601 datetime", details={"due_date": value})


def _check_links(db: Session, fields: Dict[str, Any]) -> None:
    rid = fields.get("related_resource_id")
    if rid is not None and not db.get(Resource, int(rid)):
        raise NotFoundError("Resource not found", details={"resource_id": int(rid)})
    sid = fields.get("related_step_id")
    if sid is not None and not db.get(RoadmapStep, int(sid)):
        raise NotFoundError("Roadmap step not found", details={"step_id": int(sid)})


def _normalize(fields: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(fields) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown task fields", details={"fields": unknown})

    out = dict(fields)
    if "priority" in out:
        out["priority"] = _enum_value(TaskPriority, out["priority"], "priority")
    if "status" in out:
        out["status"] = _enum_value(TaskStatus, out["status"], "status")
    if "due_date" in out:
        out["due_date"] = _parse_due_date(out["due_date"])
    if "completed" in out and not isinstance(out["completed"], bool):
        raise ValidationError("completed must be a boolean", details={"completed": out["completed"]})
    if "title" in out and not str(out["title"] or "").strip():
        raise ValidationError("title must not be empty")
    return out


def _sync_completion(fields: Dict[str, Any]) -> None:
    """Keep ``completed`` and ``status`` in agreement.

    ``completed`` wins when both are given: true means status ``completed``,
    false moves a ``completed`` (or missing) status to ``in_progress``.
    Only a status given: ``completed`` follows it.
    """
    if "completed" in fields:
        if fields["completed"]:
            fields["status"] = TaskStatus.completed
        elif fields.get("status") in (None, TaskStatus.completed):
            fields["status"] = TaskStatus.in_progress
    elif "status" in fields:
        fields["completed"] = fields["status"] == TaskStatus.completed


def create_task(db: Session, *, user_id: int, fields: Mapping[str, Any]) -> Dict[str, Any]:
    data = _normalize(fields)
    if not str(data.get("title") or "").strip():
        raise ValidationError("title is required")
    if "due_date" not in data:
        raise ValidationError("due_date is required")
    data.setdefault("priority", TaskPriority.medium)
    if "completed" not in data and "status" not in data:
        data["status"] = TaskStatus.not_started
        data["completed"] = False
    _sync_completion(data)
    _check_links(db, data)

    try:
        ensure_user_exists(db, user_id)
        task = Task(user_id=int(user_id), **data)
        db.add(task)
        db.commit()
        db.refresh(task)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to create task") from exc

    logger.info("Created task id=%s user=%s", task.id, user_id)
    return task_dict(task)


def update_task(db: Session, task_id: int, fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply a partial update; ``completed == True`` iff ``status == "completed"`` afterwards."""
    task = db.get(Task, int(task_id))
    if not task:
        raise NotFoundError("Task not found", details={"task_id": int(task_id)})

    data = _normalize(fields)
    _sync_completion(data)
    _check_links(db, data)

    try:
        for key, value in data.items():
            setattr(task, key, value)
        db.commit()
        db.refresh(task)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to update task") from exc

    logger.info("Updated task id=%s fields=%s", task_id, sorted(data))
    return task_dict(task)


def delete_task(db: Session, task_id: int) -> None:
    task = db.get(Task, int(task_id))
    if not task:
        raise NotFoundError("Task not found", details={"task_id": int(task_id)})
    try:
        db.delete(task)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreFailure("Failed to delete task") from exc
    logger.info("Deleted task id=%s", task_id)
