"""
Shopping-list repository functions.

Items are shared by the whole circle. Purchased and removed items stay listed
for the display-retention window.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, aliased

from circles.db import models
from circles.db.models import now_utc
from circles.db.repositories._filters import retention_cutoff, still_visible

ItemRow = Tuple[models.ShoppingItem, models.User, Optional[models.User], Optional[models.User]]


def add_item(db: Session, user_id: int, circle_id: int, description: str) -> int:
    db_item = models.ShoppingItem(circle_id=circle_id, description=description, created_by=user_id)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return int(db_item.id)


def _live(db: Session, item_id: int, circle_id: int):
    return db.query(models.ShoppingItem).filter(
        models.ShoppingItem.id == item_id,
        models.ShoppingItem.circle_id == circle_id,
        models.ShoppingItem.removed_on.is_(None),
    )


def get_item(db: Session, item_id: int, circle_id: int) -> Optional[models.ShoppingItem]:
    return _live(db, item_id, circle_id).first()


def set_photo_path(db: Session, item_id: int, circle_id: int, photo_path: str) -> Optional[str]:
    """Attach a stored photo and return its newly generated public id."""
    photo_id = str(uuid.uuid4())
    changed = _live(db, item_id, circle_id).update(
        {models.ShoppingItem.photo_id: photo_id, models.ShoppingItem.photo_path: photo_path},
        synchronize_session=False,
    )
    db.commit()
    return photo_id if changed > 0 else None


def update_item(db: Session, item_id: int, circle_id: int, description: str) -> bool:
    changed = _live(db, item_id, circle_id).update(
        {models.ShoppingItem.description: description}, synchronize_session=False
    )
    db.commit()
    return changed > 0


def mark_as_purchased(db: Session, item_id: int, user_id: int, circle_id: int, price: Decimal,
                      now: Optional[datetime] = None) -> bool:
    changed = _live(db, item_id, circle_id).update(
        {
            models.ShoppingItem.purchased_on: now or now_utc(),
            models.ShoppingItem.purchased_by: user_id,
            models.ShoppingItem.purchased_price: price,
        },
        synchronize_session=False,
    )
    db.commit()
    return changed > 0


def remove_item(db: Session, item_id: int, user_id: int, circle_id: int,
                now: Optional[datetime] = None) -> bool:
    changed = _live(db, item_id, circle_id).update(
        {models.ShoppingItem.removed_on: now or now_utc(), models.ShoppingItem.removed_by: user_id},
        synchronize_session=False,
    )
    db.commit()
    return changed > 0


def _listing(db: Session, retention_days: int, now: Optional[datetime]):
    creator = aliased(models.User)
    purchaser = aliased(models.User)
    remover = aliased(models.User)
    cutoff = retention_cutoff(retention_days, now)
    return (
        db.query(models.ShoppingItem, creator, purchaser, remover)
        .join(creator, models.ShoppingItem.created_by == creator.id)
        .outerjoin(purchaser, models.ShoppingItem.purchased_by == purchaser.id)
        .outerjoin(remover, models.ShoppingItem.removed_by == remover.id)
        .filter(
            still_visible(models.ShoppingItem.purchased_on, cutoff),
            still_visible(models.ShoppingItem.removed_on, cutoff),
        )
    )


def get_active_items(db: Session, circle_id: int, retention_days: int,
                     now: Optional[datetime] = None) -> List[ItemRow]:
    return (
        _listing(db, retention_days, now)
        .filter(models.ShoppingItem.circle_id == circle_id)
        .order_by(models.ShoppingItem.id)
        .all()
    )


def get_item_by_photo_id(db: Session, photo_id: str) -> Optional[models.ShoppingItem]:
    return db.query(models.ShoppingItem).filter(models.ShoppingItem.photo_id == photo_id).first()
