"""
Tracking-system repository functions: the last known position of each user.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def get_position(db: Session, user_id: int) -> Optional[models.TrackingPosition]:
    return db.query(models.TrackingPosition).filter(models.TrackingPosition.user_id == user_id).first()


def add_position(db: Session, user_id: int, latitude: Decimal, longitude: Decimal,
                 now: Optional[datetime] = None) -> int:
    db_position = models.TrackingPosition(
        user_id=user_id, latitude=latitude, longitude=longitude, last_updated_on=now or now_utc()
    )
    db.add(db_position)
    db.commit()
    db.refresh(db_position)
    return int(db_position.id)


def update_position(db: Session, user_id: int, latitude: Decimal, longitude: Decimal,
                    now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.TrackingPosition)
        .filter(models.TrackingPosition.user_id == user_id)
        .update(
            {
                models.TrackingPosition.latitude: latitude,
                models.TrackingPosition.longitude: longitude,
                models.TrackingPosition.last_updated_on: now or now_utc(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def get_positions_in_circle(db: Session, circle_id: int) -> List[Tuple[models.TrackingPosition, models.User]]:
    """Positions of verified, confirmed, active members of an active circle."""
    return (
        db.query(models.TrackingPosition, models.User)
        .join(models.User, models.TrackingPosition.user_id == models.User.id)
        .join(models.CircleMember, models.CircleMember.user_id == models.User.id)
        .join(models.Circle, models.CircleMember.circle_id == models.Circle.id)
        .filter(
            models.Circle.id == circle_id,
            models.Circle.inactivated_on.is_(None),
            models.CircleMember.joined_on.isnot(None),
            models.CircleMember.left_on.is_(None),
            models.User.email_validated_on.isnot(None),
        )
        .order_by(models.User.id)
        .all()
    )
