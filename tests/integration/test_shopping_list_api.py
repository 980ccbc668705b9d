from sqlalchemy.exc import SQLAlchemyError

from circles.db.repositories import shopping as shopping_repo


def _add_item(client, circle_id, headers, description="Milk"):
    response = client.post("/plugin/shoppingList/add", json={"circleId": circle_id, "description": description},
                           headers=headers)
    assert response.status_code == 200
    return response.json()["data"]["id"]


def test_shopping_list_is_shared(client, member_setup, make_user, add_member, auth_headers):
    owner, circle_id, headers = member_setup
    member = make_user(first_name="Mia", last_name="Member")
    add_member(circle_id, member, owner)

    item_id = _add_item(client, circle_id, headers)
    purchased = client.put("/plugin/shoppingList/markAsPurchased",
                           json={"circleId": circle_id, "id": item_id, "price": "3.50"},
                           headers=auth_headers(member))
    assert purchased.status_code == 200

    [item] = client.get("/plugin/shoppingList/list", params={"circleId": circle_id},
                        headers=auth_headers(member)).json()["data"]
    assert item["description"] == "Milk"
    assert item["createdBy"] == "Olivia Owner"
    assert item["purchasedBy"] == "Mia Member"
    assert item["purchasedPrice"] == 3.5
    assert item["photoUrl"] is None


def test_update_and_remove(client, member_setup):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)

    assert client.put("/plugin/shoppingList/update",
                      json={"circleId": circle_id, "id": item_id, "description": "Oat milk"},
                      headers=headers).status_code == 200
    assert client.request("DELETE", "/plugin/shoppingList/remove", json={"circleId": circle_id, "id": item_id},
                          headers=headers).status_code == 200

    [item] = client.get("/plugin/shoppingList/list", params={"circleId": circle_id},
                        headers=headers).json()["data"]
    assert item["description"] == "Oat milk"
    assert item["removedBy"] == "Olivia Owner"


def test_empty_list_and_unknown_item(client, member_setup):
    _, circle_id, headers = member_setup
    empty = client.get("/plugin/shoppingList/list", params={"circleId": circle_id}, headers=headers)
    assert empty.status_code == 404
    assert empty.json()["status"]["errors"] == ["There are no Shopping list itens."]

    missing = client.put("/plugin/shoppingList/update",
                         json={"circleId": circle_id, "id": 404, "description": "Ghost"}, headers=headers)
    assert missing.status_code == 404
    assert missing.json()["status"]["errors"] == ["There are no item with this id."]


def test_price_must_be_decimal(client, member_setup):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)
    response = client.put("/plugin/shoppingList/markAsPurchased",
                          json={"circleId": circle_id, "id": item_id, "price": "cheap"}, headers=headers)
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Price need to be a decimal value"]


def test_photo_upload_and_download(client, member_setup, jpeg_bytes):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)

    uploaded = client.put(
        "/plugin/shoppingList/setPhotoPath",
        data={"circleId": str(circle_id), "id": str(item_id)},
        files={"photo": ("milk.jpg", jpeg_bytes, "image/jpeg")},
        headers=headers,
    )
    assert uploaded.status_code == 200
    photo = uploaded.json()["data"]
    assert photo["photoUrl"] == f"http://testserver/plugin/shoppingList/photo/{photo['photoId']}"

    [item] = client.get("/plugin/shoppingList/list", params={"circleId": circle_id},
                        headers=headers).json()["data"]
    assert item["photoUrl"] == photo["photoUrl"]

    downloaded = client.get(f"/plugin/shoppingList/photo/{photo['photoId']}", headers=headers)
    assert downloaded.status_code == 200
    assert downloaded.headers["content-type"] == "image/jpeg"
    assert downloaded.content == jpeg_bytes


def test_photo_upload_rejects_non_jpeg(client, member_setup):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)
    response = client.put(
        "/plugin/shoppingList/setPhotoPath",
        data={"circleId": str(circle_id), "id": str(item_id)},
        files={"photo": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert response.status_code == 422
    assert response.json()["status"]["errors"] == ["Only JPEG images up to 2MB are allowed."]


def test_photo_requires_membership(client, member_setup, make_user, auth_headers, jpeg_bytes):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)
    photo_id = client.put(
        "/plugin/shoppingList/setPhotoPath",
        data={"circleId": str(circle_id), "id": str(item_id)},
        files={"photo": ("milk.jpg", jpeg_bytes, "image/jpeg")},
        headers=headers,
    ).json()["data"]["photoId"]

    response = client.get(f"/plugin/shoppingList/photo/{photo_id}", headers=auth_headers(make_user()))
    assert response.status_code == 401


def test_failed_photo_update_leaves_no_file(client, member_setup, jpeg_bytes, storage, monkeypatch):
    _, circle_id, headers = member_setup
    item_id = _add_item(client, circle_id, headers)

    def _upload():
        return client.put(
            "/plugin/shoppingList/setPhotoPath",
            data={"circleId": str(circle_id), "id": str(item_id)},
            files={"photo": ("milk.jpg", jpeg_bytes, "image/jpeg")},
            headers=headers,
        )

    # Item removed between the existence check and the update
    monkeypatch.setattr(shopping_repo, "set_photo_path", lambda *args, **kwargs: None)
    assert _upload().status_code == 404
    assert list(storage.root.rglob("*.jpg")) == []

    def _broken(*args, **kwargs):
        raise SQLAlchemyError("update failed")

    monkeypatch.setattr(shopping_repo, "set_photo_path", _broken)
    assert _upload().status_code == 500
    assert list(storage.root.rglob("*.jpg")) == []
