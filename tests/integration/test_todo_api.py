def test_todo_lifecycle(client, member_setup):
    _, circle_id, headers = member_setup

    empty = client.get("/plugin/todo/list", params={"circleId": circle_id}, headers=headers)
    assert empty.status_code == 404
    assert empty.json()["status"]["errors"] == ["There are no To-dos."]

    added = client.post("/plugin/todo/add", json={"circleId": circle_id, "description": "Buy stamps"},
                        headers=headers)
    assert added.status_code == 200
    todo_id = added.json()["data"]["id"]

    updated = client.put("/plugin/todo/update",
                         json={"circleId": circle_id, "id": todo_id, "description": "Buy more stamps"},
                         headers=headers)
    assert updated.status_code == 200
    assert client.put("/plugin/todo/markAsDone", json={"circleId": circle_id, "id": todo_id},
                      headers=headers).status_code == 200

    [todo] = client.get("/plugin/todo/list", params={"circleId": circle_id}, headers=headers).json()["data"]
    assert todo["id"] == todo_id
    assert todo["description"] == "Buy more stamps"
    assert todo["done"] is True
    assert todo["removed"] is False

    removed = client.request("DELETE", "/plugin/todo/remove", json={"circleId": circle_id, "id": todo_id},
                             headers=headers)
    assert removed.status_code == 200
    [todo] = client.get("/plugin/todo/list", params={"circleId": circle_id}, headers=headers).json()["data"]
    assert todo["removed"] is True


def test_todo_validation(client, member_setup):
    _, circle_id, headers = member_setup
    short = client.post("/plugin/todo/add", json={"circleId": circle_id, "description": "ab"}, headers=headers)
    assert short.status_code == 422
    assert short.json()["status"]["errors"] == [
        "The description must have a minimum of 3 characters and a maximum of 254 characters"
    ]

    missing_id = client.put("/plugin/todo/markAsDone", json={"circleId": circle_id}, headers=headers)
    assert missing_id.status_code == 422
    assert missing_id.json()["status"]["errors"] == ["To-do Id is required"]


def test_unknown_todo_is_not_found(client, member_setup):
    _, circle_id, headers = member_setup
    response = client.put("/plugin/todo/markAsDone", json={"circleId": circle_id, "id": 999}, headers=headers)
    assert response.status_code == 404
    assert response.json()["status"]["errors"] == ["To-do not found."]


def test_non_members_are_rejected(client, member_setup, make_user, auth_headers):
    _, circle_id, _ = member_setup
    stranger = auth_headers(make_user())
    response = client.post("/plugin/todo/add", json={"circleId": circle_id, "description": "Sneak in"},
                           headers=stranger)
    assert response.status_code == 401
    assert client.get("/plugin/todo/list", params={"circleId": circle_id}).status_code == 401
