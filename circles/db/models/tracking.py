from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric
from .base import Base, now_utc


class TrackingPosition(Base):
    """Last reported position; a single row per user."""
    __tablename__ = 'plugin_tracking_positions'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, unique=True)
    latitude = Column(Numeric(11, 8), nullable=False)
    longitude = Column(Numeric(11, 8), nullable=False)
    last_updated_on = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
