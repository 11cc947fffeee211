from __future__ import annotations

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.models import UserGoal, UserSkill
from app.services.resource_service import get_resource, list_resources, recommend_resources, resources_for_skills


def test_list_resources_filters_by_type(db, catalog):
    assert len(list_resources(db)) == 3
    assert [r["title"] for r in list_resources(db, resource_type="book")] == ["Docker in Practice"]


def test_resources_for_skills(db, catalog):
    skills = catalog["skills"]
    out = resources_for_skills(db, [skills["SQL"], skills["Python"]])
    assert [r["title"] for r in out] == ["Intro to SQL", "Python Crash Course"]
    assert resources_for_skills(db, []) == []


def test_recommendations_prefer_goal_gaps(db, catalog):
    skills = catalog["skills"]
    db.add_all(
        [
            UserGoal(user_id=1, career_path_id=catalog["path_id"], is_active=True),
            UserSkill(user_id=1, skill_id=skills["Python"], proficiency_level=5),
            UserSkill(user_id=1, skill_id=skills["SQL"], proficiency_level=4),
        ]
    )
    db.commit()

    out = recommend_resources(db, 1, limit=3)
    # Docker is required by the path and not acquired; Python/SQL are rated.
    assert [r["title"] for r in out] == ["Docker in Practice", "Intro to SQL", "Python Crash Course"]
    assert len(recommend_resources(db, 1, limit=1)) == 1


def test_recommendations_without_goal_use_rated_skills(db, catalog):
    db.add(UserSkill(user_id=2, skill_id=catalog["skills"]["Python"], proficiency_level=1))
    db.commit()
    assert [r["title"] for r in recommend_resources(db, 2)] == ["Python Crash Course"]


def test_no_ratings_no_recommendations(db, catalog):
    assert recommend_resources(db, 3) == []


def test_get_resource(db, catalog):
    rid = catalog["resources"]["Intro to SQL"]
    assert get_resource(db, rid)["title"] == "Intro to SQL"
    with pytest.raises(NotFoundError):
        get_resource(db, 9999)


@pytest.mark.parametrize("limit", [0, -1])
def test_recommendations_reject_non_positive_limit(db, catalog, limit):
    db.add(UserSkill(user_id=4, skill_id=catalog["skills"]["Python"], proficiency_level=2))
    db.commit()
    with pytest.raises(ValidationError):
        recommend_resources(db, 4, limit=limit)
