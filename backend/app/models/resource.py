from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base, JSONList


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    provider: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="course")  # course, video, article, book, project
    rating: Mapped[str | None] = mapped_column(String(20), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "6 weeks"
    skill_ids: Mapped[list] = mapped_column(JSONList, nullable=False, default=list)
