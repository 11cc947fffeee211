from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.models import CareerPath, Resource, RoadmapStep, Skill


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def now():
    return datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog(db):
    """Five skills, a 4-step "Backend Developer" path, an empty path and two resources."""
    skills = [
        Skill(name="Python", description="Language"),
        Skill(name="SQL", description="Databases"),
        Skill(name="HTTP", description="Web protocols"),
        Skill(name="Docker", description="Containers"),
        Skill(name="Testing", description="pytest and friends"),
    ]
    db.add_all(skills)
    db.flush()
    py, sql, http, docker, testing = (s.id for s in skills)

    path = CareerPath(title="Backend Developer", description="APIs and services", required_skills=[py, sql, http, docker])
    empty = CareerPath(title="Explorer", description="No steps yet", required_skills=[])
    db.add_all([path, empty])
    db.flush()

    # Inserted out of order on purpose; the roadmap sorts by ``order``.
    steps = [
        RoadmapStep(career_path_id=path.id, title="Services", order=3, required_skills=[http, py]),
        RoadmapStep(career_path_id=path.id, title="Language basics", order=1, required_skills=[py]),
        RoadmapStep(career_path_id=path.id, title="Shipping", order=4, required_skills=[docker, testing]),
        RoadmapStep(career_path_id=path.id, title="Data", order=2, required_skills=[sql]),
    ]
    db.add_all(steps)
    db.flush()

    resources = [
        Resource(title="Intro to SQL", provider="Coursera", url="https://example.com/sql", type="course", skill_ids=[sql]),
        Resource(title="Docker in Practice", provider="Book", url="https://example.com/docker", type="book", skill_ids=[docker]),
        Resource(title="Python Crash Course", provider="YouTube", url="https://example.com/py", type="video", skill_ids=[py]),
    ]
    db.add_all(resources)
    db.commit()

    ordered = sorted(steps, key=lambda s: s.order)
    return {
        "skills": {s.name: s.id for s in skills},
        "path_id": path.id,
        "empty_path_id": empty.id,
        "step_ids": [s.id for s in ordered],
        "resources": {r.title: r.id for r in resources},
    }
