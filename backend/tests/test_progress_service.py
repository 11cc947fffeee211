from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.models import RoadmapStep, UserGoal, UserProgress, UserSkill
from app.services.assessment_service import process_assessment
from app.services.progress_service import (
    aggregate_progress,
    average_progress,
    get_user_goal,
    record_step_progress,
)
from app.services.user_service import ensure_user_exists


def _set_goal(db, user_id, path_id):
    ensure_user_exists(db, user_id)
    db.add(UserGoal(user_id=user_id, career_path_id=path_id, is_active=True))
    db.commit()


def _progress(db, user_id, step_id, progress, completed=False, completed_date=None):
    db.add(
        UserProgress(
            user_id=user_id,
            roadmap_step_id=step_id,
            progress=progress,
            completed=completed,
            completed_date=completed_date,
        )
    )


def test_average_progress_rounds_half_up():
    assert average_progress(150, 4) == 38
    assert average_progress(50, 4) == 13
    assert average_progress(0, 4) == 0
    assert average_progress(0, 0) == 0


def test_scenario_four_steps(db, catalog):
    user_id = 7
    _set_goal(db, user_id, catalog["path_id"])
    s1, s2, _s3, _s4 = catalog["step_ids"]
    _progress(db, user_id, s1, 100, completed=True, completed_date=datetime(2026, 3, 2, tzinfo=timezone.utc))
    _progress(db, user_id, s2, 50)
    db.add_all(
        [
            UserSkill(user_id=user_id, skill_id=catalog["skills"]["Python"], proficiency_level=4),
            UserSkill(user_id=user_id, skill_id=catalog["skills"]["SQL"], proficiency_level=3),
            UserSkill(user_id=user_id, skill_id=catalog["skills"]["HTTP"], proficiency_level=2),
        ]
    )
    db.commit()

    out = aggregate_progress(db, user_id)

    assert out["overall_progress"] == 38
    assert out["stats"]["acquired_skills"] == 2
    assert out["stats"]["completed_steps"] == 1
    assert out["stats"]["completed_courses"] == 4
    assert out["stats"]["completed_projects"] == 1
    assert out["stats"]["total_steps"] == 4
    assert out["stats"]["weeks_consistent"] == 1

    details = out["progress_details"]
    assert [d["id"] for d in details] == catalog["step_ids"]
    assert [d["progress"] for d in details] == [100, 50, 0, 0]
    assert [d["completed"] for d in details] == [True, False, False, False]
    assert [d["status"] for d in details] == ["complete", "active", "incomplete", "incomplete"]
    assert details[0]["completed_date"].startswith("2026-03-02")
    assert details[2]["completed_date"] is None


def test_zero_step_roadmap_reports_zero(db, catalog):
    _set_goal(db, 3, catalog["empty_path_id"])
    out = aggregate_progress(db, 3)
    assert out["overall_progress"] == 0
    assert out["progress_details"] == []


def test_rows_from_other_paths_are_ignored(db, catalog):
    user_id = 4
    _set_goal(db, user_id, catalog["path_id"])
    other = RoadmapStep(career_path_id=catalog["empty_path_id"], title="Elsewhere", order=1, required_skills=[])
    db.add(other)
    db.flush()
    _progress(db, user_id, other.id, 100, completed=True)
    _progress(db, user_id, catalog["step_ids"][0], 40)
    db.commit()

    out = aggregate_progress(db, user_id)
    assert out["overall_progress"] == 10
    assert out["stats"]["completed_steps"] == 0


def test_aggregate_is_idempotent(db, catalog):
    _set_goal(db, 5, catalog["path_id"])
    _progress(db, 5, catalog["step_ids"][1], 70)
    db.commit()

    assert aggregate_progress(db, 5) == aggregate_progress(db, 5)


def test_no_goal_is_not_found(db, catalog):
    with pytest.raises(NotFoundError):
        aggregate_progress(db, 42)


def test_inactive_goal_is_not_found(db, catalog):
    ensure_user_exists(db, 8)
    db.add(UserGoal(user_id=8, career_path_id=catalog["path_id"], is_active=False))
    db.commit()
    with pytest.raises(NotFoundError):
        aggregate_progress(db, 8)


def test_get_user_goal_embeds_career_path(db, catalog):
    _set_goal(db, 9, catalog["path_id"])
    goal = get_user_goal(db, 9)
    assert goal["career_path_id"] == catalog["path_id"]
    assert goal["career_path"]["title"] == "Backend Developer"

    with pytest.raises(NotFoundError):
        get_user_goal(db, 10)


def test_assessment_is_visible_to_next_aggregation(db, catalog):
    process_assessment(
        db,
        user_id=11,
        skills_assessment=[{"skill_id": catalog["skills"]["Python"], "proficiency_level": 5}],
        career_goal=catalog["path_id"],
    )
    out = aggregate_progress(db, 11)
    assert out["stats"]["acquired_skills"] == 1
    assert out["overall_progress"] == 0


def test_record_step_progress_upserts_and_tracks_completion(db, catalog):
    step = catalog["step_ids"][0]

    first = record_step_progress(db, user_id=12, step_id=step, progress=30)
    assert first["completed"] is False
    assert first["status"] == "active"

    done = record_step_progress(db, user_id=12, step_id=step, progress=60, completed=True)
    assert done["progress"] == 100
    assert done["completed"] is True
    assert done["completed_date"] is not None

    again = record_step_progress(db, user_id=12, step_id=step, progress=100)
    assert again["completed_date"] == done["completed_date"]

    reopened = record_step_progress(db, user_id=12, step_id=step, progress=80, completed=False)
    assert reopened["completed"] is False
    assert reopened["completed_date"] is None

    rows = db.query(UserProgress).filter(UserProgress.user_id == 12).all()
    assert len(rows) == 1
    assert rows[0].progress == 80


@pytest.mark.parametrize("value", [-1, 101, "50", True])
def test_record_step_progress_rejects_bad_values(db, catalog, value):
    with pytest.raises(ValidationError):
        record_step_progress(db, user_id=12, step_id=catalog["step_ids"][0], progress=value)


def test_record_step_progress_unknown_step(db, catalog):
    with pytest.raises(NotFoundError):
        record_step_progress(db, user_id=12, step_id=9999, progress=10)


def test_weeks_consistent_counts_distinct_weeks(db, catalog):
    user_id = 13
    _set_goal(db, user_id, catalog["path_id"])
    monday = datetime(2026, 3, 2, 9, tzinfo=timezone.utc)
    s1, s2, s3, _ = catalog["step_ids"]
    _progress(db, user_id, s1, 100, True, monday)
    _progress(db, user_id, s2, 100, True, monday + timedelta(days=2))
    _progress(db, user_id, s3, 100, True, monday + timedelta(days=8))
    db.commit()

    assert aggregate_progress(db, user_id)["stats"]["weeks_consistent"] == 2
