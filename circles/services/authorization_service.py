"""
Authentication: local e-mail/password login, Google sign-in and bearer tokens.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from sqlalchemy.orm import Session

from circles.db import models
from circles.db.models import now_utc
from circles.db.repositories import users as user_repo
from circles.db.schemas import LoginResult, UserOut
from circles.services._guards import storage_guard
from circles.services.circle_service import CircleService
from circles.utils.config import AppConfig, get_config
from circles.utils.errors import Conflict, Unauthorized
from circles.utils.token_crypto import (
    decode_access_token,
    hash_password,
    issue_access_token,
    needs_rehash,
    verify_password,
)

logger = logging.getLogger(__name__)

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


@dataclass(frozen=True)
class GoogleIdentity:
    subject: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None


class GoogleIdentityVerifier:
    """Verifies Google ID tokens against the tokeninfo endpoint."""

    def __init__(self, client_ids: List[str], timeout: float = 10.0):
        self.client_ids = list(client_ids)
        self.timeout = timeout

    def verify(self, id_token: str) -> GoogleIdentity:
        if not self.client_ids:
            logger.warning("google_login_rejected: no client ids configured")
            raise Unauthorized()
        try:
            response = requests.get(GOOGLE_TOKENINFO_URL, params={"id_token": id_token}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("google_tokeninfo_unreachable: %s", e)
            raise Unauthorized()
        if response.status_code != 200:
            raise Unauthorized()

        payload: Dict[str, Any] = response.json()
        if payload.get("aud") not in self.client_ids:
            raise Unauthorized()
        if payload.get("iss") not in GOOGLE_ISSUERS:
            raise Unauthorized()
        if not payload.get("sub") or not payload.get("email"):
            raise Unauthorized()
        if str(payload.get("email_verified", "false")).lower() != "true":
            raise Unauthorized()

        return GoogleIdentity(
            subject=payload["sub"],
            email=payload["email"].strip().lower(),
            first_name=payload.get("given_name"),
            last_name=payload.get("family_name"),
            photo_url=payload.get("picture"),
        )


class AuthorizationService:
    def __init__(self, db: Session, config: Optional[AppConfig] = None,
                 verifier: Optional[GoogleIdentityVerifier] = None):
        self.db = db
        self.config = config or get_config()
        self.verifier = verifier or GoogleIdentityVerifier(self.config.google_client_ids)

    def issue_token(self, user: models.User) -> str:
        return issue_access_token(
            user.ext_id,
            self.config.auth_secret,
            ttl_days=self.config.token_ttl_days,
            algorithm=self.config.auth_algorithm,
        )

    def decode_token(self, token: str) -> Optional[str]:
        claims = decode_access_token(token, self.config.auth_secret, algorithm=self.config.auth_algorithm)
        return claims.ext_id if claims else None

    def _login_result(self, user: models.User) -> Dict[str, Any]:
        return LoginResult(token=self.issue_token(user), user=UserOut.model_validate(user)).to_wire()

    def authenticate(self, email: str, password: str) -> Dict[str, Any]:
        with storage_guard(self.db, "authenticate"):
            user = user_repo.get_user_by_email(self.db, email)
        if user is None or user.is_blocked or not verify_password(password, user.password_hash):
            raise Unauthorized()
        if needs_rehash(user.password_hash):
            with storage_guard(self.db, "rehash_password"):
                user_repo.update_password(self.db, user.id, hash_password(password))
        return self._login_result(user)

    def google_login(self, id_token: str) -> Dict[str, Any]:
        identity = self.verifier.verify(id_token)

        with storage_guard(self.db, "google_login"):
            user = user_repo.get_user_by_email(self.db, identity.email)
            if user is not None and user.type != models.UserType.GOOGLE:
                raise Conflict("User already exists with this email.")

            if user is None:
                user_id = user_repo.create_user(
                    self.db,
                    email=identity.email,
                    first_name=identity.first_name,
                    last_name=identity.last_name,
                    user_type=models.UserType.GOOGLE,
                    photo_url=identity.photo_url,
                    federated_subject=identity.subject,
                    email_validated_on=now_utc(),
                )
                logger.info("user_registered: user_id=%s type=google", user_id)
                user = user_repo.get_user_by_id(self.db, user_id)
                CircleService(self.db, config=self.config).backfill_invitee_on_registration(identity.email, user_id)

        if user is None or user.is_blocked or user.federated_subject != identity.subject:
            raise Unauthorized()
        return self._login_result(user)
