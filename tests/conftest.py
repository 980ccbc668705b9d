import os

import pytest

os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("AUTH_SECRET", "test-secret")

from fastapi.testclient import TestClient

from circles.api import deps
from circles.api.main import app
from circles.db import models
from circles.db.database import SessionLocal, engine, get_db
from circles.db.repositories import circles as circle_repo
from circles.db.repositories import users as user_repo
from circles.db.models import now_utc
from circles.services.authorization_service import GoogleIdentity
from circles.services.email_service import EmailService
from circles.services.notification_service import NotificationService
from circles.services.storage import PhotoStorage
from circles.utils.config import AppConfig
from circles.utils.errors import Unauthorized
from circles.utils.token_crypto import hash_password, issue_access_token

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
DEFAULT_PASSWORD = "Secret1"


class RecordingEmailService(EmailService):
    """Renders the real templates and records messages instead of sending them."""

    def __init__(self, succeed: bool = True):
        super().__init__()
        self.sent = []
        self.succeed = succeed

    def send_email_sync(self, to_email, subject, html_content, text_content=None):
        self.sent.append({
            'to': to_email,
            'subject': subject,
            'html': html_content,
            'text': text_content,
        })
        if self.succeed:
            return {'success': True, 'smtp_result': None}
        return {'success': False, 'error': 'SMTP unavailable'}


class FakeGoogleVerifier:
    def __init__(self):
        self.identities = {}

    def verify(self, id_token):
        if id_token not in self.identities:
            raise Unauthorized()
        return self.identities[id_token]

    def register(self, id_token, email, subject="google-sub-1", first_name="Gina", last_name="Google"):
        self.identities[id_token] = GoogleIdentity(
            subject=subject, email=email, first_name=first_name, last_name=last_name
        )


@pytest.fixture(scope="session", autouse=True)
def _schema():
    models.Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(models.Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture
def app_config(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTH_SECRET", "test-secret")
    monkeypatch.setenv("UPLOAD_ROOT", str(tmp_path / "public"))
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    return AppConfig()


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def notifications(email_service, app_config):
    return NotificationService(email_service, app_config)


@pytest.fixture
def google_verifier():
    return FakeGoogleVerifier()


@pytest.fixture
def storage(app_config):
    return PhotoStorage(app_config)


@pytest.fixture
def client(db_session, app_config, notifications, google_verifier, storage):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[deps.get_app_config] = lambda: app_config
    app.dependency_overrides[deps.get_notification_service] = lambda: notifications
    app.dependency_overrides[deps.get_identity_verifier] = lambda: google_verifier
    app.dependency_overrides[deps.get_photo_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(email=None, first_name="Ada", last_name="Lovelace", password=None, validated=True,
              user_type=models.UserType.LOCAL):
        counter["n"] += 1
        user_id = user_repo.create_user(
            db_session,
            email=email or f"user{counter['n']}@example.com",
            first_name=first_name,
            last_name=last_name,
            user_type=user_type,
            password_hash=hash_password(password) if password else None,
            email_validated_on=now_utc() if validated else None,
        )
        return user_repo.get_user_by_id(db_session, user_id)

    return _make


@pytest.fixture
def make_circle(db_session):
    def _make(owner, name="Family"):
        return circle_repo.create_circle_with_owner(db_session, name, owner.id, owner.email)

    return _make


@pytest.fixture
def add_member(db_session):
    """Add a user to a circle; confirmed unless ``confirmed=False``."""
    def _add(circle_id, user, invited_by, confirmed=True):
        member_id = circle_repo.add_member(db_session, circle_id, invited_by.id, user.id, user.email)
        if confirmed:
            circle_repo.confirm_member(db_session, user.id, circle_id)
        return member_id

    return _add


@pytest.fixture
def make_plugin(db_session):
    def _make(name="To-do", price=0):
        # The migration seeds the catalogue; tests insert rows directly.
        plugin = models.Plugin(name=name, price=price)
        db_session.add(plugin)
        db_session.commit()
        return plugin.id

    return _make


@pytest.fixture
def auth_headers(app_config):
    def _headers(user):
        token = issue_access_token(
            user.ext_id, app_config.auth_secret, ttl_days=app_config.token_ttl_days,
            algorithm=app_config.auth_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def member_setup(make_user, make_circle, auth_headers):
    """An owner with one circle, ready to call plugin routes."""
    owner = make_user(email="owner@example.com", first_name="Olivia", last_name="Owner")
    circle_id = make_circle(owner)
    return owner, circle_id, auth_headers(owner)


@pytest.fixture
def jpeg_bytes():
    return JPEG_BYTES


@pytest.fixture
def failing_notifications(app_config):
    return NotificationService(RecordingEmailService(succeed=False), app_config)
