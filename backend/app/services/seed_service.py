"""Small reference catalog for local runs (skills, one career path, resources)."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.models.career_path import CareerPath, RoadmapStep
from app.models.resource import Resource
from app.models.skill import Skill

logger = logging.getLogger(__name__)

SKILLS = [
    ("Python", "General-purpose programming for data work", "programming"),
    ("SQL", "Querying relational databases", "programming"),
    ("Statistics", "Descriptive and inferential statistics", "analytics"),
    ("Data Visualization", "Charts and dashboards that tell a story", "analytics"),
    ("Excel", "Spreadsheet modelling and pivot tables", "tool"),
    ("Communication", "Presenting findings to stakeholders", "soft_skill"),
]

# (title, description, skill names in the order they are learned)
DATA_ANALYST_STEPS = [
    ("Programming foundations", "Learn Python basics and spreadsheet analysis", ["Python", "Excel"]),
    ("Working with data", "Query and clean data with SQL", ["SQL"]),
    ("Analysis and statistics", "Apply statistics to real datasets", ["Statistics", "Python"]),
    ("Portfolio project", "Build and present an end-to-end analysis", ["Data Visualization", "Communication"]),
]

RESOURCES = [
    ("Python for Everybody", "Coursera", "course", "4.8", "8 weeks", ["Python"]),
    ("SQL for Data Analysis", "Udacity", "course", "4.6", "4 weeks", ["SQL"]),
    ("Statistics Fundamentals", "YouTube", "video", "4.7", "3 hours", ["Statistics"]),
    ("Storytelling with Data", "Book", "book", "4.9", None, ["Data Visualization", "Communication"]),
    ("Excel Skills for Business", "Coursera", "course", "4.7", "6 weeks", ["Excel"]),
]


def seed_demo_catalog(db: Session) -> bool:
    """Insert the demo catalog when no skills exist yet. Returns True if seeded."""
    if db.query(Skill.id).first() is not None:
        return False

    skills = {name: Skill(name=name, description=desc, category=cat) for name, desc, cat in SKILLS}
    db.add_all(skills.values())
    db.flush()

    path = CareerPath(
        title="Data Analyst",
        description="Turn raw data into decisions",
        required_skills=[skills[name].id for name, _, _ in SKILLS],
    )
    db.add(path)
    db.flush()

    for order, (title, desc, names) in enumerate(DATA_ANALYST_STEPS, start=1):
        db.add(
            RoadmapStep(
                career_path_id=path.id,
                title=title,
                description=desc,
                order=order,
                required_skills=[skills[n].id for n in names],
            )
        )

    for title, provider, rtype, rating, duration, names in RESOURCES:
        db.add(
            Resource(
                title=title,
                provider=provider,
                url="",
                type=rtype,
                rating=rating,
                duration=duration,
                skill_ids=[skills[n].id for n in names],
            )
        )

    db.commit()
    logger.info("Seeded demo catalog: %s skills, %s steps, %s resources", len(SKILLS), len(DATA_ANALYST_STEPS), len(RESOURCES))
    return True
