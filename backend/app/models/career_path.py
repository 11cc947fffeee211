from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base, JSONList


class CareerPath(Base):
    __tablename__ = "career_paths"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Skill ids
    required_skills: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)


class RoadmapStep(Base):
    __tablename__ = "roadmap_steps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    career_path_id: Mapped[int] = mapped_column(Integer, ForeignKey("career_paths.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Ordered skill ids; the roadmap view keeps this order.
    required_skills: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
