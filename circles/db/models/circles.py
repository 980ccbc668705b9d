from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from .base import Base, now_utc


class Circle(Base):
    __tablename__ = 'circles'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(56), nullable=False)
    image_path = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    inactivated_on = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('ix_circles_created_by', 'created_by'),
    )


class CircleMember(Base):
    """Membership row.

    Active while ``left_on`` is null; confirmed once ``joined_on`` is set.
    ``user_id`` stays null for invitations sent to an email without an account.
    """
    __tablename__ = 'circle_members'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=True)
    email = Column(String(254), nullable=False)
    joined_on = Column(DateTime(timezone=True), nullable=True)
    left_on = Column(DateTime(timezone=True), nullable=True)
    admin_since = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('ix_circle_members_circle_id', 'circle_id'),
        Index('ix_circle_members_user_id', 'user_id'),
        Index('ix_circle_members_email', 'email'),
    )
