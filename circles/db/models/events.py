from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from .base import Base, now_utc


class Event(Base):
    __tablename__ = 'plugin_events'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    title = Column(String(254), nullable=False)
    note = Column(Text, nullable=True)
    start_on = Column(DateTime(timezone=True), nullable=False)
    end_on = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_events_circle_id', 'circle_id'),
    )


class EventMember(Base):
    __tablename__ = 'plugin_event_members'
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('plugin_events.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_event_members_event_id', 'event_id'),
    )


class EventPhoto(Base):
    __tablename__ = 'plugin_event_photos'
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('plugin_events.id', ondelete='CASCADE'), nullable=False)
    photo_id = Column(String(36), nullable=False, unique=True)
    photo_path = Column(String, nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_event_photos_event_id', 'event_id'),
    )
