"""
API dependency helpers.

Provides configuration, collaborating services and the authenticated user
context for routes. Tests override these through ``app.dependency_overrides``.
"""
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from circles.db import models
from circles.db.database import get_db
from circles.db.repositories import circles as circle_repo
from circles.db.repositories import users as user_repo
from circles.services.authorization_service import GoogleIdentityVerifier
from circles.services.email_service import get_email_service
from circles.services.notification_service import NotificationService
from circles.services.storage import PhotoStorage
from circles.utils.config import AppConfig, get_config
from circles.utils.errors import Unauthorized, ValidationFailed
from circles.utils.token_crypto import decode_access_token
from circles.utils.validators import check_id


def get_app_config() -> AppConfig:
    return get_config()


def get_notification_service(config: AppConfig = Depends(get_app_config)) -> NotificationService:
    return NotificationService(get_email_service(), config)


def get_identity_verifier(config: AppConfig = Depends(get_app_config)) -> GoogleIdentityVerifier:
    return GoogleIdentityVerifier(config.google_client_ids)


def get_photo_storage(config: AppConfig = Depends(get_app_config)) -> PhotoStorage:
    return PhotoStorage(config)


def request_base_url(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# Contract:
# Returns (sqlalchemy User model, current_user_context_dict)
# Raises Unauthorized if the bearer token cannot be resolved to an active user.

def get_current_user_context(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    authorization: Optional[str] = Header(default=None),
) -> Tuple[models.User, Dict[str, Any]]:
    token = _bearer_token(authorization)
    claims = decode_access_token(token, config.auth_secret, algorithm=config.auth_algorithm) if token else None
    if claims is None:
        raise Unauthorized()

    user = user_repo.get_user_by_ext_id(db, claims.ext_id)
    if user is None or user.is_blocked:
        raise Unauthorized()

    current_user = {
        "id": user.id,
        "ext_id": user.ext_id,
        "email": user.email,
        "circles": circle_repo.get_confirmed_circle_ids(db, user.id),
    }
    return user, current_user


def get_member_circles(user_context=Depends(get_current_user_context)) -> List[int]:
    """Confirmed circle ids of the caller, resolved once per request."""
    _, current_user = user_context
    return current_user["circles"]


def circle_id_query(
    circle_id: Optional[str] = Query(default=None, alias="circleId"),
    user_context=Depends(get_current_user_context),
) -> int:
    # Resolved after the user context: a missing token is a 401 before any 422.
    try:
        return check_id(circle_id, "Circle Id is required")
    except ValueError as e:
        raise ValidationFailed(str(e))


def id_query(value: Optional[str], message: str) -> int:
    try:
        return check_id(value, message)
    except ValueError as e:
        raise ValidationFailed(str(e))
