from circles.db.repositories import circles as circle_repo


def test_create_and_list_circles(client, make_user, auth_headers):
    owner = make_user()
    headers = auth_headers(owner)

    assert client.get("/circle/byUser", headers=headers).json()["data"] == []

    created = client.post("/circle/create", json={"name": "Family"}, headers=headers)
    assert created.status_code == 200
    circle_id = created.json()["data"]["circleId"]

    [circle] = client.get("/circle/byUser", headers=headers).json()["data"]
    assert circle["id"] == circle_id
    assert circle["name"] == "Family"
    assert circle["isOwner"] is True
    assert circle["isAdmin"] is True
    assert circle["joinedAt"] is not None


def test_circle_name_validation(client, make_user, auth_headers):
    response = client.post("/circle/create", json={"name": "ab"}, headers=auth_headers(make_user()))
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == [
        "The name must have a minimum of 3 characters and a maximum of 56 characters"
    ]


def test_quota_over_http(client, make_user, auth_headers):
    headers = auth_headers(make_user())
    for name in ("One", "Two"):
        assert client.post("/circle/create", json={"name": name}, headers=headers).status_code == 200
    response = client.post("/circle/create", json={"name": "Three"}, headers=headers)
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["You reached the free account limit."]


def test_invite_confirm_and_leave(client, make_user, make_circle, auth_headers, email_service):
    owner, friend = make_user(), make_user(email="friend@example.com")
    circle_id = make_circle(owner)

    invited = client.post("/circle/inviteUser", json={"circleId": circle_id, "email": "friend@example.com"},
                          headers=auth_headers(owner))
    assert invited.status_code == 200
    assert email_service.sent[-1]["to"] == "friend@example.com"

    again = client.post("/circle/inviteUser", json={"circleId": circle_id, "email": "friend@example.com"},
                        headers=auth_headers(owner))
    assert again.status_code == 409

    [pending] = client.get("/circle/byUser", headers=auth_headers(friend)).json()["data"]
    assert pending["joinedAt"] is None

    # Pending members cannot read the member list yet
    members = client.get("/circle/members", params={"circleId": circle_id}, headers=auth_headers(friend))
    assert members.status_code == 401

    for _ in range(2):
        confirmed = client.post("/circle/confirmUserAsMember", json={"circleId": circle_id},
                                headers=auth_headers(friend))
        assert confirmed.status_code == 200

    members = client.get("/circle/members", params={"circleId": circle_id}, headers=auth_headers(friend))
    assert [m["email"] for m in members.json()["data"]] == [owner.email, "friend@example.com"]

    for _ in range(2):
        left = client.post("/circle/removeUserAsMember", json={"circleId": circle_id}, headers=auth_headers(friend))
        assert left.status_code == 200
    assert client.get("/circle/byUser", headers=auth_headers(friend)).json()["data"] == []


def test_invite_requires_admin(client, make_user, make_circle, add_member, auth_headers):
    owner, member = make_user(), make_user()
    circle_id = make_circle(owner)
    add_member(circle_id, member, owner)
    response = client.post("/circle/inviteUser", json={"circleId": circle_id, "email": "x@example.com"},
                           headers=auth_headers(member))
    assert response.status_code == 401
    assert response.json()["status"]["errors"] == ["Unauthorized"]


def test_admin_removes_member(client, make_user, make_circle, add_member, auth_headers):
    owner, member = make_user(), make_user()
    circle_id = make_circle(owner)
    add_member(circle_id, member, owner)

    response = client.post("/circle/removeUserAsMember", json={"circleId": circle_id, "userId": member.id},
                           headers=auth_headers(owner))
    assert response.status_code == 200
    owner_leaves = client.post("/circle/removeUserAsMember", json={"circleId": circle_id},
                               headers=auth_headers(owner))
    assert owner_leaves.status_code == 409


def test_set_admin_and_deactivate(client, make_user, make_circle, add_member, auth_headers):
    owner, member = make_user(), make_user()
    circle_id = make_circle(owner)
    add_member(circle_id, member, owner)

    promoted = client.post("/circle/setAdmin", json={"circleId": circle_id, "userId": member.id, "admin": True},
                           headers=auth_headers(owner))
    assert promoted.status_code == 200
    [circle] = client.get("/circle/byUser", headers=auth_headers(member)).json()["data"]
    assert circle["isAdmin"] is True

    assert client.post("/circle/deactivate", json={"circleId": circle_id},
                       headers=auth_headers(member)).status_code == 401
    assert client.post("/circle/deactivate", json={"circleId": circle_id},
                       headers=auth_headers(owner)).status_code == 200
    assert client.get("/circle/byUser", headers=auth_headers(member)).json()["data"] == []


def test_authentication_is_checked_before_query_validation(client, make_user, auth_headers):
    assert client.get("/circle/members").status_code == 401
    response = client.get("/circle/members", headers=auth_headers(make_user()))
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Circle Id is required"]


def test_circle_id_is_required_in_body(client, make_user, auth_headers):
    response = client.post("/circle/confirmUserAsMember", json={}, headers=auth_headers(make_user()))
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Circle Id is required"]


def test_create_and_by_user_wire_keys(client, make_user, auth_headers):
    headers = auth_headers(make_user())
    created = client.post("/circle/create", json={"name": "Family"}, headers=headers).json()["data"]
    assert set(created) == {"circleId"}

    [circle] = client.get("/circle/byUser", headers=headers).json()["data"]
    assert set(circle) == {"id", "name", "isOwner", "isAdmin", "joinedAt"}
    assert circle["id"] == created["circleId"]


def test_members_route_resolves_confirmed_circles_once(client, make_user, make_circle, auth_headers, monkeypatch):
    owner = make_user()
    circle_id = make_circle(owner)
    calls = []
    original = circle_repo.get_confirmed_circle_ids

    def _counting(db, user_id):
        calls.append(user_id)
        return original(db, user_id)

    monkeypatch.setattr(circle_repo, "get_confirmed_circle_ids", _counting)
    response = client.get("/circle/members", params={"circleId": circle_id}, headers=auth_headers(owner))
    assert response.status_code == 200
    assert calls == [owner.id]
