"""
User accounts: registration, e-mail verification, password recovery and profile.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc
from circles.db.repositories import users as user_repo
from circles.services._guards import storage_guard
from circles.services.circle_service import CircleService
from circles.services.notification_service import NotificationService
from circles.utils.config import AppConfig, get_config
from circles.utils.errors import NotFound, ValidationFailed
from circles.utils.token_crypto import generate_url_token, hash_password

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "The token is invalid or has expired"


class UserService:
    def __init__(self, db: Session, config: Optional[AppConfig] = None,
                 notifications: Optional[NotificationService] = None):
        self.db = db
        self.config = config or get_config()
        self._notifications = notifications

    @property
    def notifications(self) -> NotificationService:
        if self._notifications is None:
            self._notifications = NotificationService(config=self.config)
        return self._notifications

    def get_by_email(self, email: str) -> Optional[models.User]:
        with storage_guard(self.db, "get_user_by_email"):
            return user_repo.get_user_by_email(self.db, email)

    def get_by_id(self, user_id: int) -> Optional[models.User]:
        with storage_guard(self.db, "get_user_by_id"):
            return user_repo.get_user_by_id(self.db, user_id)

    def get_by_ext_id(self, ext_id: str) -> Optional[models.User]:
        with storage_guard(self.db, "get_user_by_ext_id"):
            return user_repo.get_user_by_ext_id(self.db, ext_id)

    def _validation_expiry(self):
        return now_utc() + timedelta(hours=self.config.email_verification_ttl_hours)

    def register(self, email: str, password: str, first_name: str, last_name: str, base_url: str) -> int:
        """Create an unverified local account and send the verification e-mail.

        Pending invitations addressed to the e-mail are linked to the new user.
        A failed send is logged; the account stays registered.
        """
        token = generate_url_token()
        with storage_guard(self.db, "register"):
            if user_repo.get_user_by_email(self.db, email) is not None:
                raise ValidationFailed("E-mail already in use")
            user_id = user_repo.create_user(
                self.db,
                email=email,
                first_name=first_name,
                last_name=last_name,
                user_type=models.UserType.LOCAL,
                password_hash=hash_password(password),
                email_validation_hash=token,
                email_validation_expires_on=self._validation_expiry(),
            )
        logger.info("user_registered: user_id=%s type=local", user_id)

        CircleService(self.db, config=self.config).backfill_invitee_on_registration(email, user_id)

        result = self.notifications.notify_email_verification(email, first_name, token, base_url)
        if not result.get('success'):
            logger.error("verification_email_failed: user_id=%s", user_id)
        return user_id

    def resend_validation_email(self, email: str, base_url: str) -> None:
        token = generate_url_token()
        with storage_guard(self.db, "resend_validation_email"):
            user = user_repo.get_user_by_email(self.db, email)
            if user is None or user.email_validated_on is not None:
                raise NotFound("User not found.")
            user_repo.set_email_validation_hash(self.db, user.id, token, self._validation_expiry())

        result = self.notifications.notify_email_verification(user.email, user.first_name, token, base_url)
        if not result.get('success'):
            logger.error("verification_email_failed: user_id=%s", user.id)

    def validate_email(self, token: str) -> None:
        with storage_guard(self.db, "validate_email"):
            user = user_repo.get_user_by_email_validation_hash(self.db, token)
            if user is None or not user_repo.set_email_as_validated(self.db, user.id):
                raise NotFound(INVALID_TOKEN_MESSAGE)

    def forgot_password(self, email: str, base_url: str) -> None:
        token = generate_url_token()
        expires_on = now_utc() + timedelta(hours=self.config.password_reset_ttl_hours)
        with storage_guard(self.db, "forgot_password"):
            user = user_repo.get_user_by_email(self.db, email)
            if user is None or user.is_blocked:
                raise NotFound("User not found.")
            user_repo.set_forgot_password_hash(self.db, user.id, token, expires_on)

        result = self.notifications.notify_password_reset(user.email, token, base_url)
        if not result.get('success'):
            logger.error("password_reset_email_failed: user_id=%s", user.id)

    def validate_forgot_password(self, token: str) -> bool:
        with storage_guard(self.db, "validate_forgot_password"):
            return user_repo.get_user_by_forgot_password_hash(self.db, token) is not None

    def reset_password(self, token: str, email: str, password: str) -> None:
        with storage_guard(self.db, "reset_password"):
            user = user_repo.get_user_by_forgot_password_hash(self.db, token, email=email)
            if user is None:
                raise NotFound(INVALID_TOKEN_MESSAGE)
            user_repo.update_password(self.db, user.id, hash_password(password), expire_reset_token=True)
        logger.info("password_reset: user_id=%s", user.id)

    def change_password(self, user_id: int, password: str) -> None:
        with storage_guard(self.db, "change_password"):
            if not user_repo.update_password(self.db, user_id, hash_password(password)):
                raise NotFound("User not found.")

    def update_profile(self, user_id: int, first_name: str, last_name: str,
                       date_of_birth: Optional[date] = None) -> models.User:
        with storage_guard(self.db, "update_profile"):
            user = user_repo.update_profile(
                self.db, user_id, first_name=first_name, last_name=last_name, date_of_birth=date_of_birth
            )
        if user is None:
            raise NotFound("User not found.")
        return user
