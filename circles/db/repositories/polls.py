"""
Poll repository functions: polls, their answers and votes.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc
from circles.db.repositories._filters import retention_cutoff


def add_poll(db: Session, circle_id: int, user_id: int, question: str,
             start_on: datetime, end_on: datetime) -> int:
    db_poll = models.Poll(
        circle_id=circle_id,
        question=question,
        created_by=user_id,
        period_start_on=start_on,
        period_end_on=end_on,
    )
    db.add(db_poll)
    db.commit()
    db.refresh(db_poll)
    return int(db_poll.id)


def get_poll(db: Session, poll_id: int, circle_id: int) -> Optional[models.Poll]:
    return (
        db.query(models.Poll)
        .filter(models.Poll.id == poll_id, models.Poll.circle_id == circle_id, models.Poll.removed_on.is_(None))
        .first()
    )


def edit_poll(db: Session, poll_id: int, circle_id: int, question: str,
              start_on: datetime, end_on: datetime) -> bool:
    changed = (
        db.query(models.Poll)
        .filter(models.Poll.id == poll_id, models.Poll.circle_id == circle_id, models.Poll.removed_on.is_(None))
        .update(
            {
                models.Poll.question: question,
                models.Poll.period_start_on: start_on,
                models.Poll.period_end_on: end_on,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def remove_poll(db: Session, poll_id: int, circle_id: int, user_id: int,
                now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.Poll)
        .filter(models.Poll.id == poll_id, models.Poll.circle_id == circle_id, models.Poll.removed_on.is_(None))
        .update({models.Poll.removed_on: now or now_utc(), models.Poll.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def _polls_with_live_answers(db: Session, circle_id: int):
    live_answers = (
        db.query(models.PollAnswer.poll_id)
        .filter(models.PollAnswer.removed_on.is_(None))
    )
    return (
        db.query(models.Poll, models.User)
        .join(models.User, models.Poll.created_by == models.User.id)
        .filter(
            models.Poll.circle_id == circle_id,
            models.Poll.removed_on.is_(None),
            models.Poll.id.in_(live_answers),
        )
    )


def get_active_polls(db: Session, circle_id: int, now: Optional[datetime] = None) -> List[Tuple[models.Poll, models.User]]:
    """Polls whose voting period contains ``now``."""
    now = now or now_utc()
    return (
        _polls_with_live_answers(db, circle_id)
        .filter(models.Poll.period_start_on <= now, models.Poll.period_end_on >= now)
        .order_by(models.Poll.period_start_on, models.Poll.id)
        .all()
    )


def get_valid_polls(db: Session, circle_id: int, window_days: int,
                    now: Optional[datetime] = None) -> List[Tuple[models.Poll, models.User]]:
    """Polls that started within the last ``window_days``."""
    cutoff = retention_cutoff(window_days, now)
    return (
        _polls_with_live_answers(db, circle_id)
        .filter(models.Poll.period_start_on >= cutoff)
        .order_by(models.Poll.period_start_on, models.Poll.id)
        .all()
    )


def add_answer(db: Session, poll_id: int, user_id: int, answer: str) -> int:
    db_answer = models.PollAnswer(poll_id=poll_id, answer=answer, created_by=user_id)
    db.add(db_answer)
    db.commit()
    db.refresh(db_answer)
    return int(db_answer.id)


def get_answer(db: Session, answer_id: int) -> Optional[models.PollAnswer]:
    return (
        db.query(models.PollAnswer)
        .filter(models.PollAnswer.id == answer_id, models.PollAnswer.removed_on.is_(None))
        .first()
    )


def edit_answer(db: Session, answer_id: int, poll_id: int, answer: str) -> bool:
    changed = (
        db.query(models.PollAnswer)
        .filter(
            models.PollAnswer.id == answer_id,
            models.PollAnswer.poll_id == poll_id,
            models.PollAnswer.removed_on.is_(None),
        )
        .update({models.PollAnswer.answer: answer}, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def remove_answer(db: Session, answer_id: int, poll_id: int, user_id: int,
                  now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.PollAnswer)
        .filter(
            models.PollAnswer.id == answer_id,
            models.PollAnswer.poll_id == poll_id,
            models.PollAnswer.removed_on.is_(None),
        )
        .update({models.PollAnswer.removed_on: now or now_utc(), models.PollAnswer.removed_by: user_id},
                synchronize_session=False)
    )
    db.commit()
    return changed > 0


def get_active_answers(db: Session, poll_id: int) -> List[models.PollAnswer]:
    return (
        db.query(models.PollAnswer)
        .filter(models.PollAnswer.poll_id == poll_id, models.PollAnswer.removed_on.is_(None))
        .order_by(models.PollAnswer.id)
        .all()
    )


def has_voted_in_poll(db: Session, poll_id: int, user_id: int) -> bool:
    found = (
        db.query(models.PollVote.id)
        .join(models.PollAnswer, models.PollVote.answer_id == models.PollAnswer.id)
        .filter(models.PollAnswer.poll_id == poll_id, models.PollVote.created_by == user_id)
        .first()
    )
    return found is not None


def add_vote(db: Session, answer_id: int, user_id: int) -> int:
    db_vote = models.PollVote(answer_id=answer_id, created_by=user_id)
    db.add(db_vote)
    db.flush()
    total = (
        db.query(func.count(models.PollVote.id))
        .filter(models.PollVote.answer_id == answer_id)
        .scalar()
    )
    db.query(models.PollAnswer).filter(models.PollAnswer.id == answer_id).update(
        {models.PollAnswer.total_votes: int(total or 0)}, synchronize_session=False
    )
    db.commit()
    return int(db_vote.id)


def get_votes(db: Session, poll_id: int) -> List[Tuple[models.PollVote, models.User]]:
    return (
        db.query(models.PollVote, models.User)
        .join(models.PollAnswer, models.PollVote.answer_id == models.PollAnswer.id)
        .join(models.Poll, models.PollAnswer.poll_id == models.Poll.id)
        .join(models.User, models.PollVote.created_by == models.User.id)
        .filter(
            models.Poll.id == poll_id,
            models.Poll.removed_on.is_(None),
            models.PollAnswer.removed_on.is_(None),
        )
        .order_by(models.PollVote.id)
        .all()
    )
