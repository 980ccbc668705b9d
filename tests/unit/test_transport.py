from circles.utils.transport import Transport, ok


def test_ok_with_payload():
    assert ok({"id": 3}) == {"status": {"id": 200, "errors": None}, "data": {"id": 3}}


def test_ok_without_payload_omits_data():
    body = ok()
    assert body == {"status": {"id": 200, "errors": None}}
    assert "data" not in body


def test_ok_keeps_falsy_payloads():
    assert ok([])["data"] == []
    assert ok(None)["data"] is None


def test_bare_error_becomes_list():
    body = Transport(404, "There are no To-dos.").to_dict()
    assert body == {"status": {"id": 404, "errors": ["There are no To-dos."]}}


def test_errors_drop_data():
    body = Transport(422, ["a", "b"], data={"ignored": True}).to_dict()
    assert body["status"]["errors"] == ["a", "b"]
    assert "data" not in body
