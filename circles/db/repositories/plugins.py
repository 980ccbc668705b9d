"""
Plugin catalogue and per-circle attachment repository functions.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def get_active_plugins(db: Session) -> List[models.Plugin]:
    return (
        db.query(models.Plugin)
        .filter(models.Plugin.inactivated_on.is_(None))
        .order_by(models.Plugin.id)
        .all()
    )


def get_active_plugin(db: Session, plugin_id: int) -> Optional[models.Plugin]:
    return (
        db.query(models.Plugin)
        .filter(models.Plugin.id == plugin_id, models.Plugin.inactivated_on.is_(None))
        .first()
    )


def get_plugins_in_circle(db: Session, circle_id: int) -> List[models.Plugin]:
    return (
        db.query(models.Plugin)
        .join(models.CirclePlugin, models.CirclePlugin.plugin_id == models.Plugin.id)
        .filter(
            models.CirclePlugin.circle_id == circle_id,
            models.CirclePlugin.inactivated_on.is_(None),
            models.Plugin.inactivated_on.is_(None),
        )
        .order_by(models.Plugin.id)
        .all()
    )


def get_attachment(db: Session, plugin_id: int, circle_id: int) -> Optional[models.CirclePlugin]:
    """The attachment row for the pair, active or not."""
    return (
        db.query(models.CirclePlugin)
        .filter(models.CirclePlugin.plugin_id == plugin_id, models.CirclePlugin.circle_id == circle_id)
        .first()
    )


def add_plugin_to_circle(db: Session, plugin_id: int, circle_id: int, user_id: int) -> int:
    """Insert the attachment; raises IntegrityError if the pair already has a row."""
    db_link = models.CirclePlugin(circle_id=circle_id, plugin_id=plugin_id, created_by=user_id)
    db.add(db_link)
    db.commit()
    db.refresh(db_link)
    return int(db_link.id)


def reactivate_plugin_in_circle(db: Session, plugin_id: int, circle_id: int, user_id: int,
                                now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.CirclePlugin)
        .filter(
            models.CirclePlugin.plugin_id == plugin_id,
            models.CirclePlugin.circle_id == circle_id,
            models.CirclePlugin.inactivated_on.isnot(None),
        )
        .update(
            {
                models.CirclePlugin.inactivated_on: None,
                models.CirclePlugin.inactivated_by: None,
                models.CirclePlugin.created_by: user_id,
                models.CirclePlugin.created_on: now or now_utc(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def remove_plugin_from_circle(db: Session, plugin_id: int, circle_id: int, user_id: int,
                              now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.CirclePlugin)
        .filter(
            models.CirclePlugin.plugin_id == plugin_id,
            models.CirclePlugin.circle_id == circle_id,
            models.CirclePlugin.inactivated_on.is_(None),
        )
        .update(
            {
                models.CirclePlugin.inactivated_on: now or now_utc(),
                models.CirclePlugin.inactivated_by: user_id,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0
