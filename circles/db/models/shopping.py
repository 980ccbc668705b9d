from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, Index
from .base import Base, now_utc


class ShoppingItem(Base):
    __tablename__ = 'plugin_shopping_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    description = Column(String(254), nullable=False)
    photo_id = Column(String(36), nullable=True, unique=True)
    photo_path = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    purchased_on = Column(DateTime(timezone=True), nullable=True)
    purchased_by = Column(Integer, ForeignKey('users.id'), nullable=True)
    purchased_price = Column(Numeric(10, 2), nullable=True)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_shopping_items_circle_id', 'circle_id'),
    )
