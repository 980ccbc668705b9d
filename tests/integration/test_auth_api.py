from circles.db import models
from circles.db.repositories import circles as circle_repo
from circles.db.repositories import users as user_repo
from circles.utils.validators import PASSWORD_MESSAGE


def _register(client, email="ada@example.com", password="Secret1"):
    return client.post("/user/create", json={
        "email": email, "password": password, "firstName": "Ada", "lastName": "Lovelace",
    })


def test_root_and_health(client):
    assert client.get("/").json() == {"status": {"id": 200, "errors": None}, "data": "Circles Back-End"}
    assert client.get("/health").json() == {"status": "ok"}


def test_register_validate_and_login(client, db_session, email_service):
    response = _register(client)
    assert response.status_code == 200
    assert response.json() == {"status": {"id": 200, "errors": None}}

    user = user_repo.get_user_by_email(db_session, "ada@example.com")
    assert user.email_validated_on is None
    sent = email_service.sent[-1]
    assert sent["to"] == "ada@example.com"
    assert f"/user/validateEmail?token={user.email_validation_hash}" in sent["html"]

    page = client.get("/user/validateEmail", params={"token": user.email_validation_hash})
    assert page.status_code == 200
    assert "verified" in page.text

    again = client.get("/user/validateEmail", params={"token": "stale"})
    assert again.status_code == 404
    assert "The token is invalid or has expired" in again.text

    login = client.post("/auth/local", json={"email": "ADA@example.com", "password": "Secret1"})
    assert login.status_code == 200
    data = login.json()["data"]
    assert data["token"]
    assert data["user"] == {
        "email": "ada@example.com",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "photoUrl": None,
        "dateOfBirth": None,
        "type": "local",
    }

    me = client.get("/user/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.json()["data"]["email"] == "ada@example.com"


def test_register_validation_messages(client):
    response = client.post("/user/create", json={"email": "nope", "password": "weak"})
    assert response.status_code == 422
    errors = response.json()["status"]["errors"]
    assert "E-mail must be a valid e-mail." in errors
    assert PASSWORD_MESSAGE in errors
    assert "First name cannot be empty." in errors
    assert "Last name cannot be empty." in errors
    assert "data" not in response.json()


def test_register_duplicate_email(client):
    _register(client)
    response = _register(client)
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["E-mail already in use"]


def test_register_survives_email_failure(client, email_service, db_session):
    email_service.succeed = False
    assert _register(client).status_code == 200
    assert user_repo.get_user_by_email(db_session, "ada@example.com") is not None


def test_resend_validation_email(client, make_user, email_service):
    make_user(email="pending@example.com", validated=False)
    assert client.post("/user/resendValidationEmail", json={"email": "pending@example.com"}).status_code == 200
    assert email_service.sent[-1]["to"] == "pending@example.com"

    make_user(email="done@example.com")
    response = client.post("/user/resendValidationEmail", json={"email": "done@example.com"})
    assert response.status_code == 404


def test_wrong_password_is_unauthorized(client, make_user):
    make_user(email="ada@example.com", password="Secret1")
    response = client.post("/auth/local", json={"email": "ada@example.com", "password": "Secret2"})
    assert response.status_code == 401
    assert response.json()["status"]["errors"] == ["Unauthorized"]


def test_blocked_user_cannot_login(client, db_session, make_user):
    user = make_user(email="ada@example.com", password="Secret1")
    user.is_blocked = True
    db_session.commit()
    response = client.post("/auth/local", json={"email": "ada@example.com", "password": "Secret1"})
    assert response.status_code == 401


def test_forgot_and_reset_password(client, db_session, make_user, email_service):
    make_user(email="ada@example.com", password="Secret1")
    assert client.post("/user/forgotPassword", json={"email": "ada@example.com"}).status_code == 200
    token = user_repo.get_user_by_email(db_session, "ada@example.com").forgot_password_hash
    assert f"validateForgotPassword?token={token}" in email_service.sent[-1]["html"]

    page = client.get("/user/validateForgotPassword", params={"token": token})
    assert page.status_code == 200
    assert token in page.text

    reset = client.post("/user/resetPassword", json={"token": token, "email": "ada@example.com",
                                                     "password": "Newpass2"})
    assert reset.status_code == 200
    assert client.post("/auth/local", json={"email": "ada@example.com", "password": "Newpass2"}).status_code == 200

    # The token is single use
    reused = client.post("/user/resetPassword", json={"token": token, "email": "ada@example.com",
                                                      "password": "Other3x"})
    assert reused.status_code == 404
    assert client.get("/user/validateForgotPassword", params={"token": token}).status_code == 404


def test_forgot_password_unknown_user(client):
    response = client.post("/user/forgotPassword", json={"email": "ghost@example.com"})
    assert response.status_code == 404
    assert response.json()["status"]["errors"] == ["User not found."]


def test_profile_and_change_password(client, make_user, auth_headers):
    user = make_user(email="ada@example.com", password="Secret1")
    headers = auth_headers(user)

    response = client.put("/user/profile", json={"firstName": "Augusta", "lastName": "King",
                                                 "dateOfBirth": "1815-12-10"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["firstName"] == "Augusta"
    assert response.json()["data"]["dateOfBirth"] == "1815-12-10"

    assert client.put("/user/changePassword", json={"password": "Changed9"}, headers=headers).status_code == 200
    assert client.post("/auth/local", json={"email": "ada@example.com", "password": "Changed9"}).status_code == 200


def test_missing_or_bad_token_is_unauthorized(client):
    assert client.get("/user/me").status_code == 401
    response = client.get("/user/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["status"] == {"id": 401, "errors": ["Unauthorized"]}


def test_google_login_creates_verified_user(client, db_session, google_verifier, make_user, make_circle):
    owner = make_user()
    circle_id = make_circle(owner)
    circle_repo.add_member(db_session, circle_id, owner.id, None, "gina@example.com")

    google_verifier.register("good-token", "gina@example.com")
    response = client.post("/auth/google", json={"token": "good-token"})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["type"] == "google"

    user = user_repo.get_user_by_email(db_session, "gina@example.com")
    assert user.type == models.UserType.GOOGLE
    assert user.email_validated_on is not None
    assert circle_repo.get_active_membership(db_session, circle_id, user.id) is not None

    # Second login reuses the account
    assert client.post("/auth/google", json={"token": "good-token"}).status_code == 200


def test_google_login_rejections(client, google_verifier, make_user):
    assert client.post("/auth/google", json={"token": "unknown"}).status_code == 401

    response = client.post("/auth/google", json={})
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Google Token is required."]

    make_user(email="local@example.com")
    google_verifier.register("local-token", "local@example.com")
    conflict = client.post("/auth/google", json={"token": "local-token"})
    assert conflict.status_code == 409
    assert conflict.json()["status"]["errors"] == ["User already exists with this email."]
