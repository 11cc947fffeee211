from __future__ import annotations

from typing import Any, Dict, Sequence

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


def atomic_upsert(
    db: Session,
    model,
    *,
    conflict_cols: Sequence[str],
    values: Dict[str, Any],
    update_cols: Sequence[str],
) -> None:
    """INSERT ... ON CONFLICT (conflict_cols) DO UPDATE SET update_cols.

    ``conflict_cols`` must be backed by a unique constraint on ``model``.
    Dialects without ON CONFLICT fall back to select-then-write, which the
    unique constraint still guards against duplicates.
    """
    insert = _INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_cols),
            set_={c: stmt.excluded[c] for c in update_cols},
        )
        db.execute(stmt)
        return

    row = db.query(model).filter_by(**{c: values[c] for c in conflict_cols}).first()
    if row is None:
        db.add(model(**values))
    else:
        for c in update_cols:
            setattr(row, c, values[c])
    db.flush()
