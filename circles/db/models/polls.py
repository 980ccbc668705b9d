from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from .base import Base, now_utc


class Poll(Base):
    __tablename__ = 'plugin_polls'
    id = Column(Integer, primary_key=True, autoincrement=True)
    circle_id = Column(Integer, ForeignKey('circles.id', ondelete='CASCADE'), nullable=False)
    question = Column(String(1024), nullable=False)
    period_start_on = Column(DateTime(timezone=True), nullable=False)
    period_end_on = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_polls_circle_id', 'circle_id'),
    )


class PollAnswer(Base):
    __tablename__ = 'plugin_poll_answers'
    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(Integer, ForeignKey('plugin_polls.id', ondelete='CASCADE'), nullable=False)
    answer = Column(String(1024), nullable=False)
    total_votes = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)
    removed_on = Column(DateTime(timezone=True), nullable=True)
    removed_by = Column(Integer, ForeignKey('users.id'), nullable=True)

    __table_args__ = (
        Index('ix_plugin_poll_answers_poll_id', 'poll_id'),
    )


class PollVote(Base):
    __tablename__ = 'plugin_poll_votes'
    id = Column(Integer, primary_key=True, autoincrement=True)
    answer_id = Column(Integer, ForeignKey('plugin_poll_answers.id', ondelete='CASCADE'), nullable=False)
    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_on = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('ix_plugin_poll_votes_answer_id', 'answer_id'),
    )
