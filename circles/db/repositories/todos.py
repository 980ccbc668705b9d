"""
To-do repository functions.

To-dos belong to their creator within a circle. Done and removed to-dos stay
listed for the display-retention window.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc
from circles.db.repositories._filters import retention_cutoff, still_visible


def add_todo(db: Session, user_id: int, circle_id: int, description: str) -> int:
    db_todo = models.Todo(circle_id=circle_id, description=description, created_by=user_id)
    db.add(db_todo)
    db.commit()
    db.refresh(db_todo)
    return int(db_todo.id)


def _own_open(db: Session, todo_id: int, user_id: int, circle_id: int):
    return db.query(models.Todo).filter(
        models.Todo.id == todo_id,
        models.Todo.created_by == user_id,
        models.Todo.circle_id == circle_id,
        models.Todo.removed_on.is_(None),
    )


def mark_as_done(db: Session, todo_id: int, user_id: int, circle_id: int,
                 now: Optional[datetime] = None) -> bool:
    changed = (
        _own_open(db, todo_id, user_id, circle_id)
        .filter(models.Todo.done_on.is_(None))
        .update({models.Todo.done_on: now or now_utc()}, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def remove_todo(db: Session, todo_id: int, user_id: int, circle_id: int,
                now: Optional[datetime] = None) -> bool:
    changed = _own_open(db, todo_id, user_id, circle_id).update(
        {models.Todo.removed_on: now or now_utc()}, synchronize_session=False
    )
    db.commit()
    return changed > 0


def update_todo(db: Session, todo_id: int, user_id: int, circle_id: int, description: str) -> bool:
    changed = _own_open(db, todo_id, user_id, circle_id).update(
        {models.Todo.description: description}, synchronize_session=False
    )
    db.commit()
    return changed > 0


def get_todos(db: Session, circle_id: int, user_id: int, retention_days: int,
              now: Optional[datetime] = None) -> List[models.Todo]:
    cutoff = retention_cutoff(retention_days, now)
    return (
        db.query(models.Todo)
        .filter(
            models.Todo.created_by == user_id,
            models.Todo.circle_id == circle_id,
            still_visible(models.Todo.done_on, cutoff),
            still_visible(models.Todo.removed_on, cutoff),
        )
        .order_by(models.Todo.id)
        .all()
    )
