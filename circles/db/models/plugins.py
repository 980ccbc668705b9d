from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, UniqueConstraint
from .base import Base, now_utc


class Plugin(Base):
    __tablename__ = 'plugins'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(56), nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    inactivated_on = Column(DateTime(timezone=True), nullable=True)


class CirclePlugin(Base):
    """Attachment of a plugin to a circle; one row per pair, re-activated on re-attach."""
    __tablename__ = 'circle_plugins'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    plugin_id = Column(Integer, ForeignKey('plugins.id'), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    inactivated_on = Column(DateTime(timezone=True), nullable=True)
    inactivated_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        UniqueConstraint('circle_id', 'plugin_id', name='uq_circle_plugins_circle_plugin'),
    )
