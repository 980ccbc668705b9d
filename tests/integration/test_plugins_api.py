def test_catalogue_and_attachment(client, member_setup, make_plugin):
    owner, circle_id, headers = member_setup

    empty = client.get("/plugin/getAll", headers=headers)
    assert empty.status_code == 404
    assert empty.json()["status"]["errors"] == ["There are no active plugins."]

    plugin_id = make_plugin("Poll", price=2.5)
    catalogue = client.get("/plugin/getAll", headers=headers).json()["data"]
    assert catalogue == [{"id": plugin_id, "name": "Poll", "price": 2.5}]

    body = {"circleId": circle_id, "id": plugin_id}
    assert client.post("/plugin/addPluginFromCircle", json=body, headers=headers).status_code == 200
    assert client.post("/plugin/addPluginFromCircle", json=body, headers=headers).status_code == 409

    attached = client.get("/plugin/getAllFromCircle", params={"circleId": circle_id}, headers=headers)
    assert [p["id"] for p in attached.json()["data"]] == [plugin_id]

    assert client.post("/plugin/removePluginFromCircle", json=body, headers=headers).status_code == 200
    again = client.post("/plugin/removePluginFromCircle", json=body, headers=headers)
    assert again.status_code == 409
    assert client.get("/plugin/getAllFromCircle", params={"circleId": circle_id},
                      headers=headers).json()["data"] == []


def test_plugin_id_is_required(client, member_setup):
    _, circle_id, headers = member_setup
    response = client.post("/plugin/addPluginFromCircle", json={"circleId": circle_id}, headers=headers)
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Plugin Id is required"]


def test_members_cannot_attach(client, member_setup, make_user, add_member, auth_headers, make_plugin):
    owner, circle_id, _ = member_setup
    member = make_user()
    add_member(circle_id, member, owner)
    response = client.post("/plugin/addPluginFromCircle", json={"circleId": circle_id, "pluginId": make_plugin()},
                           headers=auth_headers(member))
    assert response.status_code == 401


def test_attach_accepts_plugin_id_under_id_key(client, member_setup, make_plugin):
    _, circle_id, headers = member_setup
    plugin_id = make_plugin()
    response = client.post("/plugin/addPluginFromCircle", json={"circleId": circle_id, "id": plugin_id},
                           headers=headers)
    assert response.status_code == 200
    attached = client.get("/plugin/getAllFromCircle", params={"circleId": circle_id}, headers=headers)
    assert [p["id"] for p in attached.json()["data"]] == [plugin_id]
