"""
Expenses repository functions: bill categories, bills and budgets.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def get_bill_categories(db: Session) -> List[models.BillCategory]:
    return db.query(models.BillCategory).order_by(models.BillCategory.name).all()


def get_bill_category(db: Session, category_id: int) -> Optional[models.BillCategory]:
    return db.query(models.BillCategory).filter(models.BillCategory.id == category_id).first()


def create_bill_category(db: Session, name: str) -> int:
    db_category = models.BillCategory(name=name)
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return int(db_category.id)


def get_bills(db: Session, circle_id: int) -> List[Tuple[models.Bill, models.BillCategory, models.User]]:
    return (
        db.query(models.Bill, models.BillCategory, models.User)
        .join(models.BillCategory, models.Bill.bill_category_id == models.BillCategory.id)
        .join(models.User, models.Bill.user_id == models.User.id)
        .filter(models.Bill.circle_id == circle_id, models.Bill.removed_on.is_(None))
        .order_by(models.Bill.bill_date.desc(), models.Bill.id.desc())
        .all()
    )


def add_bill(db: Session, circle_id: int, user_id: int, name: str, amount: Decimal,
             category_id: int, bill_date: date) -> int:
    db_bill = models.Bill(
        circle_id=circle_id,
        user_id=user_id,
        bill_name=name,
        bill_amount=amount,
        bill_category_id=category_id,
        bill_date=bill_date,
    )
    db.add(db_bill)
    db.commit()
    db.refresh(db_bill)
    return int(db_bill.id)


def remove_bill(db: Session, bill_id: int, circle_id: int, user_id: int,
                now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.Bill)
        .filter(models.Bill.id == bill_id, models.Bill.circle_id == circle_id, models.Bill.removed_on.is_(None))
        .update({models.Bill.removed_on: now or now_utc(), models.Bill.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def get_budgets(db: Session, circle_id: int) -> List[Tuple[models.Budget, models.User]]:
    return (
        db.query(models.Budget, models.User)
        .join(models.User, models.Budget.user_id == models.User.id)
        .filter(models.Budget.circle_id == circle_id, models.Budget.removed_on.is_(None))
        .order_by(models.Budget.start_date.desc(), models.Budget.id.desc())
        .all()
    )


def add_budget(db: Session, circle_id: int, user_id: int, name: str, amount: Decimal,
               start_date: date, end_date: date) -> int:
    db_budget = models.Budget(
        circle_id=circle_id,
        user_id=user_id,
        budget_name=name,
        budget_amount=amount,
        start_date=start_date,
        end_date=end_date,
    )
    db.add(db_budget)
    db.commit()
    db.refresh(db_budget)
    return int(db_budget.id)


def remove_budget(db: Session, budget_id: int, circle_id: int, user_id: int,
                  now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.Budget)
        .filter(models.Budget.id == budget_id, models.Budget.circle_id == circle_id,
                models.Budget.removed_on.is_(None))
        .update({models.Budget.removed_on: now or now_utc(), models.Budget.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0
