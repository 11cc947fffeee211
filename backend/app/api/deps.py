"""Common FastAPI dependencies.

There is no login: every user-scoped route takes the user id in its path.
"""

from __future__ import annotations

from app.db.session import get_db

__all__ = ["get_db"]
