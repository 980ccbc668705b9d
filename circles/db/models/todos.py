from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from .base import Base, now_utc


class Todo(Base):
    __tablename__ = 'plugin_todos'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    description = Column(String(254), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    done_on = Column(DateTime(timezone=True), nullable=True)
    removed_on = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('ix_plugin_todos_circle_creator', 'circle_id', 'created_by'),
    )
