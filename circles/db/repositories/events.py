"""
Event repository functions: events, their members and photos.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime, time, timedelta, UTC
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def add_event(db: Session, circle_id: int, user_id: int, title: str, start_on: datetime,
              end_on: datetime, note: Optional[str] = None) -> int:
    """Insert the event with its creator as the first member."""
    db_event = models.Event(
        circle_id=circle_id,
        title=title,
        note=note,
        start_on=start_on,
        end_on=end_on,
        created_by=user_id,
    )
    db.add(db_event)
    db.flush()
    db.add(models.EventMember(event_id=db_event.id, user_id=user_id, created_by=user_id))
    db.commit()
    return int(db_event.id)


def get_event(db: Session, event_id: int, circle_id: int) -> Optional[models.Event]:
    return (
        db.query(models.Event)
        .filter(models.Event.id == event_id, models.Event.circle_id == circle_id, models.Event.removed_on.is_(None))
        .first()
    )


def update_event(db: Session, event_id: int, circle_id: int, title: str, start_on: datetime,
                 end_on: datetime, note: Optional[str] = None) -> bool:
    changed = (
        db.query(models.Event)
        .filter(models.Event.id == event_id, models.Event.circle_id == circle_id, models.Event.removed_on.is_(None))
        .update(
            {
                models.Event.title: title,
                models.Event.note: note,
                models.Event.start_on: start_on,
                models.Event.end_on: end_on,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def remove_event(db: Session, event_id: int, circle_id: int, user_id: int,
                 now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.Event)
        .filter(models.Event.id == event_id, models.Event.circle_id == circle_id, models.Event.removed_on.is_(None))
        .update({models.Event.removed_on: now or now_utc(), models.Event.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def get_events(db: Session, circle_id: int, start: date, end: date) -> List[models.Event]:
    """Events starting on or after ``start`` and ending on or before ``end`` (whole days)."""
    lower = datetime.combine(start, time.min, tzinfo=UTC)
    upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=UTC)
    return (
        db.query(models.Event)
        .filter(
            models.Event.circle_id == circle_id,
            models.Event.removed_on.is_(None),
            models.Event.start_on >= lower,
            models.Event.end_on < upper,
        )
        .order_by(models.Event.start_on, models.Event.id)
        .all()
    )


def get_event_member(db: Session, event_id: int, user_id: int) -> Optional[models.EventMember]:
    return (
        db.query(models.EventMember)
        .filter(
            models.EventMember.event_id == event_id,
            models.EventMember.user_id == user_id,
            models.EventMember.removed_on.is_(None),
        )
        .first()
    )


def add_member(db: Session, event_id: int, user_id: int, created_by: int) -> int:
    db_member = models.EventMember(event_id=event_id, user_id=user_id, created_by=created_by)
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return int(db_member.id)


def get_members(db: Session, event_id: int) -> List[models.User]:
    """Verified users attending the event."""
    return (
        db.query(models.User)
        .join(models.EventMember, models.EventMember.user_id == models.User.id)
        .filter(
            models.EventMember.event_id == event_id,
            models.EventMember.removed_on.is_(None),
            models.User.email_validated_on.isnot(None),
        )
        .order_by(models.EventMember.id)
        .all()
    )


def remove_member(db: Session, event_id: int, user_id: int, removed_by: int,
                  now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.EventMember)
        .filter(
            models.EventMember.event_id == event_id,
            models.EventMember.user_id == user_id,
            models.EventMember.removed_on.is_(None),
        )
        .update({models.EventMember.removed_on: now or now_utc(), models.EventMember.removed_by: removed_by},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def add_photo(db: Session, event_id: int, photo_path: str, user_id: int) -> str:
    """Insert the photo row and return its public id."""
    photo_id = str(uuid.uuid4())
    db.add(models.EventPhoto(event_id=event_id, photo_id=photo_id, photo_path=photo_path, created_by=user_id))
    db.commit()
    return photo_id


def get_photos(db: Session, event_id: int) -> List[models.EventPhoto]:
    return (
        db.query(models.EventPhoto)
        .filter(models.EventPhoto.event_id == event_id, models.EventPhoto.removed_on.is_(None))
        .order_by(models.EventPhoto.id)
        .all()
    )


def remove_photo(db: Session, event_id: int, photo_id: str, user_id: int,
                 now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.EventPhoto)
        .filter(
            models.EventPhoto.event_id == event_id,
            models.EventPhoto.photo_id == photo_id,
            models.EventPhoto.removed_on.is_(None),
        )
        .update({models.EventPhoto.removed_on: now or now_utc(), models.EventPhoto.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def get_photo_path_for_member(db: Session, photo_id: str, user_id: int) -> Optional[str]:
    """Stored path of a live photo, visible only to confirmed members of an active circle."""
    row: Optional[Tuple[str]] = (
        db.query(models.EventPhoto.photo_path)
        .join(models.Event, models.EventPhoto.event_id == models.Event.id)
        .join(models.Circle, models.Event.circle_id == models.Circle.id)
        .join(models.CircleMember, models.CircleMember.circle_id == models.Circle.id)
        .filter(
            models.EventPhoto.photo_id == photo_id,
            models.EventPhoto.removed_on.is_(None),
            models.CircleMember.user_id == user_id,
            models.CircleMember.joined_on.isnot(None),
            models.CircleMember.left_on.is_(None),
            models.Circle.inactivated_on.is_(None),
        )
        .first()
    )
    return row[0] if row else None
