from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Numeric, Index
from .base import Base, now_utc


class BillCategory(Base):
    __tablename__ = 'plugin_bill_categories'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(56), nullable=False, unique=True)


class Bill(Base):
    __tablename__ = 'plugin_bills'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    bill_name = Column(String(56), nullable=False)
    bill_amount = Column(Numeric(12, 2), nullable=False)
    bill_category_id = Column(Integer, ForeignKey('plugin_bill_categories.id'), nullable=False)
    bill_date = Column(Date, nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_bills_circle_id', 'circle_id'),
    )


class Budget(Base):
    __tablename__ = 'plugin_budgets'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    budget_name = Column(String(56), nullable=False)
    budget_amount = Column(Numeric(12, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_budgets_circle_id', 'circle_id'),
    )
