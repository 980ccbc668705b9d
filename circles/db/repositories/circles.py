"""
Circle repository functions.

Implements circles, their memberships and invitations. Membership rows are
never deleted: leaving stamps ``left_on`` and confirming stamps ``joined_on``.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def get_circle(db: Session, circle_id: int) -> Optional[models.Circle]:
    return db.query(models.Circle).filter(models.Circle.id == circle_id).first()


def get_active_circle(db: Session, circle_id: int) -> Optional[models.Circle]:
    return (
        db.query(models.Circle)
        .filter(models.Circle.id == circle_id, models.Circle.inactivated_on.is_(None))
        .first()
    )


def lock_owner(db: Session, owner_id: int) -> Optional[models.User]:
    """Row-lock the owner for the rest of the transaction (no-op on SQLite)."""
    return (
        db.query(models.User)
        .filter(models.User.id == owner_id)
        .with_for_update()
        .first()
    )


def count_active_owned_circles(db: Session, owner_id: int) -> int:
    total = (
        db.query(func.count(models.Circle.id))
        .filter(models.Circle.created_by == owner_id, models.Circle.inactivated_on.is_(None))
        .scalar()
    )
    return int(total or 0)


def create_circle_with_owner(db: Session, name: str, owner_id: int, owner_email: str,
                             now: Optional[datetime] = None) -> int:
    """Insert the circle and the owner's membership in the caller's transaction, then commit.

    The owner joins pre-confirmed and as admin.
    """
    now = now or now_utc()
    db_circle = models.Circle(name=name, created_by=owner_id)
    db.add(db_circle)
    db.flush()
    db_member = models.CircleMember(
        circle_id=db_circle.id,
        user_id=owner_id,
        email=_normalize_email(owner_email),
        created_by=owner_id,
        joined_on=now,
        admin_since=now,
    )
    db.add(db_member)
    db.commit()
    return int(db_circle.id)


def get_memberships_for_user(db: Session, user_id: int) -> List[Tuple[models.Circle, models.CircleMember]]:
    """Active memberships (confirmed or pending) of the user in active circles."""
    return (
        db.query(models.Circle, models.CircleMember)
        .join(models.CircleMember, models.CircleMember.circle_id == models.Circle.id)
        .filter(
            models.CircleMember.user_id == user_id,
            models.CircleMember.left_on.is_(None),
            models.Circle.inactivated_on.is_(None),
        )
        .order_by(models.Circle.id)
        .all()
    )


def get_confirmed_circle_ids(db: Session, user_id: int) -> List[int]:
    rows = (
        db.query(models.CircleMember.circle_id)
        .join(models.Circle, models.CircleMember.circle_id == models.Circle.id)
        .filter(
            models.CircleMember.user_id == user_id,
            models.CircleMember.joined_on.isnot(None),
            models.CircleMember.left_on.is_(None),
            models.Circle.inactivated_on.is_(None),
        )
        .all()
    )
    return [int(r[0]) for r in rows]


def get_active_membership(db: Session, circle_id: int, user_id: int) -> Optional[models.CircleMember]:
    return (
        db.query(models.CircleMember)
        .filter(
            models.CircleMember.circle_id == circle_id,
            models.CircleMember.user_id == user_id,
            models.CircleMember.left_on.is_(None),
        )
        .first()
    )


def get_active_membership_by_email(db: Session, circle_id: int, email: str) -> Optional[models.CircleMember]:
    return (
        db.query(models.CircleMember)
        .filter(
            models.CircleMember.circle_id == circle_id,
            models.CircleMember.email == _normalize_email(email),
            models.CircleMember.left_on.is_(None),
        )
        .first()
    )


def add_member(db: Session, circle_id: int, created_by: int, user_id: Optional[int], email: str) -> int:
    db_member = models.CircleMember(
        circle_id=circle_id,
        user_id=user_id,
        email=_normalize_email(email),
        created_by=created_by,
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return int(db_member.id)


def confirm_member(db: Session, user_id: int, circle_id: int, now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.CircleMember)
        .filter(
            models.CircleMember.user_id == user_id,
            models.CircleMember.circle_id == circle_id,
            models.CircleMember.joined_on.is_(None),
            models.CircleMember.left_on.is_(None),
        )
        .update({models.CircleMember.joined_on: now or now_utc()}, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def remove_member(db: Session, user_id: int, circle_id: int, now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.CircleMember)
        .filter(
            models.CircleMember.user_id == user_id,
            models.CircleMember.circle_id == circle_id,
            models.CircleMember.left_on.is_(None),
        )
        .update({models.CircleMember.left_on: now or now_utc()}, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def backfill_invitee(db: Session, email: str, user_id: int) -> bool:
    changed = (
        db.query(models.CircleMember)
        .filter(
            models.CircleMember.email == _normalize_email(email),
            models.CircleMember.user_id.is_(None),
            models.CircleMember.joined_on.is_(None),
            models.CircleMember.left_on.is_(None),
        )
        .update({models.CircleMember.user_id: user_id}, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def set_member_admin(db: Session, circle_id: int, user_id: int, admin: bool,
                     now: Optional[datetime] = None) -> bool:
    q = db.query(models.CircleMember).filter(
        models.CircleMember.circle_id == circle_id,
        models.CircleMember.user_id == user_id,
        models.CircleMember.left_on.is_(None),
    )
    if admin:
        q = q.filter(models.CircleMember.admin_since.is_(None))
        changed = q.update({models.CircleMember.admin_since: now or now_utc()}, synchronize_session=False)
    else:
        q = q.filter(models.CircleMember.admin_since.isnot(None))
        changed = q.update({models.CircleMember.admin_since: None}, synchronize_session=False)
    db.commit()
    return changed > 0


def get_members(db: Session, circle_id: int) -> List[Tuple[models.CircleMember, Optional[models.User], models.Circle]]:
    return (
        db.query(models.CircleMember, models.User, models.Circle)
        .join(models.Circle, models.CircleMember.circle_id == models.Circle.id)
        .outerjoin(models.User, models.CircleMember.user_id == models.User.id)
        .filter(
            models.CircleMember.circle_id == circle_id,
            models.CircleMember.left_on.is_(None),
            models.Circle.inactivated_on.is_(None),
        )
        .order_by(models.CircleMember.id)
        .all()
    )


def deactivate_circle(db: Session, circle_id: int, now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.Circle)
        .filter(models.Circle.id == circle_id, models.Circle.inactivated_on.is_(None))
        .update({models.Circle.inactivated_on: now or now_utc()}, synchronize_session=False)
    )
    db.commit()
    return changed > 0
