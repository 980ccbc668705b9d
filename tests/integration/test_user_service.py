from datetime import timedelta

import pytest
from argon2 import PasswordHasher

from circles.db.models import now_utc
from circles.db.repositories import users as user_repo
from circles.services.authorization_service import AuthorizationService
from circles.services.user_service import UserService
from circles.utils import token_crypto
from circles.utils.errors import NotFound, Unauthorized


def test_lookups_normalize_email(db_session, app_config, notifications, make_user):
    user = make_user(email="Mixed.Case@Example.com")
    service = UserService(db_session, config=app_config, notifications=notifications)

    assert service.get_by_email("  MIXED.case@example.com ").id == user.id
    assert service.get_by_id(user.id).email == "mixed.case@example.com"
    assert service.get_by_ext_id(user.ext_id).id == user.id
    assert service.get_by_ext_id("unknown") is None


def test_expired_validation_token(db_session, app_config, notifications, make_user):
    user = make_user(validated=False)
    user_repo.set_email_validation_hash(db_session, user.id, "stale-token", now_utc() - timedelta(minutes=1))
    service = UserService(db_session, config=app_config, notifications=notifications)

    with pytest.raises(NotFound):
        service.validate_email("stale-token")
    assert service.get_by_id(user.id).email_validated_on is None


def test_token_roundtrip_through_service(db_session, app_config, google_verifier, make_user):
    user = make_user()
    service = AuthorizationService(db_session, config=app_config, verifier=google_verifier)

    assert service.decode_token(service.issue_token(user)) == user.ext_id
    assert service.decode_token("not-a-token") is None


def test_login_upgrades_weak_hashes(db_session, app_config, google_verifier, make_user):
    user = make_user()
    weak = PasswordHasher(time_cost=1, memory_cost=8192, parallelism=1).hash("Secret1")
    user_repo.update_password(db_session, user.id, weak)
    service = AuthorizationService(db_session, config=app_config, verifier=google_verifier)

    result = service.authenticate(user.email, "Secret1")
    assert result["user"]["email"] == user.email

    upgraded = user_repo.get_user_by_id(db_session, user.id).password_hash
    assert upgraded != weak
    assert token_crypto.needs_rehash(upgraded) is False
    with pytest.raises(Unauthorized):
        service.authenticate(user.email, "Wrong1")
