"""
User repository functions.

Covers account lookup, creation, e-mail verification and password-reset state.
"""
from __future__ import annotations

from datetime import datetime, date
from typing import Optional

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def get_user_by_id(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_ext_id(db: Session, ext_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.ext_id == ext_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == _normalize_email(email)).first()


def create_user(
    db: Session,
    *,
    email: str,
    first_name: Optional[str],
    last_name: Optional[str],
    user_type: models.UserType = models.UserType.LOCAL,
    password_hash: Optional[str] = None,
    photo_url: Optional[str] = None,
    federated_subject: Optional[str] = None,
    email_validation_hash: Optional[str] = None,
    email_validation_expires_on: Optional[datetime] = None,
    email_validated_on: Optional[datetime] = None,
) -> int:
    db_user = models.User(
        email=_normalize_email(email),
        first_name=first_name,
        last_name=last_name,
        type=user_type,
        password_hash=password_hash,
        photo_url=photo_url,
        federated_subject=federated_subject,
        email_validation_hash=email_validation_hash,
        email_validation_expires_on=email_validation_expires_on,
        email_validated_on=email_validated_on,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return int(db_user.id)


def get_user_by_email_validation_hash(db: Session, token: str, now: Optional[datetime] = None) -> Optional[models.User]:
    now = now or now_utc()
    return (
        db.query(models.User)
        .filter(
            models.User.email_validation_hash == token,
            models.User.email_validated_on.is_(None),
            models.User.email_validation_expires_on > now,
        )
        .first()
    )


def set_email_validation_hash(db: Session, user_id: int, token: str, expires_on: datetime) -> bool:
    changed = (
        db.query(models.User)
        .filter(models.User.id == user_id, models.User.email_validated_on.is_(None))
        .update(
            {
                models.User.email_validation_hash: token,
                models.User.email_validation_expires_on: expires_on,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def set_email_as_validated(db: Session, user_id: int, now: Optional[datetime] = None) -> bool:
    changed = (
        db.query(models.User)
        .filter(models.User.id == user_id, models.User.email_validated_on.is_(None))
        .update(
            {
                models.User.email_validated_on: now or now_utc(),
                models.User.email_validation_hash: None,
                models.User.email_validation_expires_on: None,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def set_forgot_password_hash(db: Session, user_id: int, token: str, expires_on: datetime) -> bool:
    changed = (
        db.query(models.User)
        .filter(models.User.id == user_id)
        .update(
            {
                models.User.forgot_password_hash: token,
                models.User.forgot_password_expires_on: expires_on,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return changed > 0


def get_user_by_forgot_password_hash(
    db: Session, token: str, email: Optional[str] = None, now: Optional[datetime] = None
) -> Optional[models.User]:
    now = now or now_utc()
    q = db.query(models.User).filter(
        models.User.forgot_password_hash == token,
        models.User.forgot_password_expires_on > now,
        models.User.is_blocked.is_(False),
    )
    if email is not None:
        q = q.filter(models.User.email == _normalize_email(email))
    return q.first()


def update_password(db: Session, user_id: int, password_hash: str, expire_reset_token: bool = False) -> bool:
    values = {models.User.password_hash: password_hash}
    if expire_reset_token:
        values[models.User.forgot_password_hash] = None
        values[models.User.forgot_password_expires_on] = None
    changed = (
        db.query(models.User)
        .filter(models.User.id == user_id)
        .update(values, synchronize_session=False)
    )
    db.commit()
    return changed > 0


def update_profile(
    db: Session,
    user_id: int,
    *,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    date_of_birth: Optional[date] = None,
    photo_url: Optional[str] = None,
) -> Optional[models.User]:
    db_user = get_user_by_id(db, user_id)
    if db_user is None:
        return None
    if first_name is not None:
        db_user.first_name = first_name
    if last_name is not None:
        db_user.last_name = last_name
    if date_of_birth is not None:
        db_user.date_of_birth = date_of_birth
    if photo_url is not None:
        db_user.photo_url = photo_url
    db.commit()
    db.refresh(db_user)
    return db_user
