import json

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Resolve backend root (…/backend/) regardless of current working directory
BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Career Roadmap Service"
    ENV: str = "dev"
    # One origin or several, comma separated or as a JSON list
    # e.g. "http://localhost:5173,https://example.com"
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Production runs on PostgreSQL; the default keeps local runs self-contained.
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'career_roadmap.db'}"
    DB_ECHO: bool = False

    # Create missing tables on startup (Alembic owns the schema in production).
    AUTO_CREATE_TABLES: bool = True

    # Seed skills / one career path / resources when the catalog is empty.
    SEED_DEMO_CATALOG: bool = False

    LOG_LEVEL: str = "INFO"

    # ===== Progress policy =====
    # A rated skill counts as "acquired" at or above this proficiency level (1..5).
    ACQUIRED_SKILL_LEVEL: int = 3

    # Placeholder heuristics: each fully completed roadmap step is worth this many
    # courses / projects in the dashboard stats.
    COURSES_PER_COMPLETED_STEP: int = 4
    PROJECTS_PER_COMPLETED_STEP: int = 1

    # How many resources the dashboard recommends.
    RECOMMENDED_RESOURCES_LIMIT: int = 3

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None or v == "":
            return []

        if isinstance(v, list):
            return v

        # JSON list first, then comma separated
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    return json.loads(s)
                except ValueError:
                    pass
            return [item.strip() for item in s.split(",") if item.strip()]

        return v


settings = Settings()
