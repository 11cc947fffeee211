from __future__ import annotations

from sqlalchemy.orm import Session

from app.models.user import User


def ensure_user_exists(db: Session, user_id: int) -> User:
    """Ensure a user row exists for a given numeric ID.

    Every user-scoped table (skills ratings, goals, progress, tasks) has a
    foreign key to ``users``. Callers pass explicit user ids, so a minimal
    row is created on first interaction. Flushes but does not commit; the
    calling operation owns the transaction.
    """

    user = db.get(User, int(user_id))
    if user:
        return user

    uid = int(user_id)
    username = f"user{uid}"
    # Keep the username unique if someone already took it.
    if db.query(User).filter(User.username == username).first():
        username = f"user{uid}-{uid}"

    user = User(id=uid, username=username, full_name=f"User {uid}")
    db.add(user)
    db.flush()
    return user
