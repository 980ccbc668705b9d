from datetime import datetime, timedelta, UTC

FORMAT = "%Y-%m-%d %H:%M:%S"


def _period(start_offset_days, end_offset_days):
    now = datetime.now(UTC)
    return (
        (now + timedelta(days=start_offset_days)).strftime(FORMAT),
        (now + timedelta(days=end_offset_days)).strftime(FORMAT),
    )


def _add_poll(client, circle_id, headers, question="Where do we eat?", period=None):
    start_on, end_on = period or _period(-1, 1)
    response = client.post("/plugin/poll/add", json={
        "circleId": circle_id, "question": question, "startOn": start_on, "endOn": end_on,
    }, headers=headers)
    assert response.status_code == 200
    return response.json()["data"]["id"]


def _add_answer(client, circle_id, poll_id, headers, answer="Pizza"):
    response = client.post("/plugin/poll/addAnswer",
                           json={"circleId": circle_id, "pollId": poll_id, "answer": answer}, headers=headers)
    assert response.status_code == 200
    return response.json()["data"]["id"]


def test_polls_need_an_answer_to_be_listed(client, member_setup):
    _, circle_id, headers = member_setup
    poll_id = _add_poll(client, circle_id, headers)

    response = client.get("/plugin/poll/getActives", params={"circleId": circle_id}, headers=headers)
    assert response.status_code == 404
    assert response.json()["status"]["errors"] == ["There are no Active Polls."]

    _add_answer(client, circle_id, poll_id, headers)
    [poll] = client.get("/plugin/poll/getActives", params={"circleId": circle_id}, headers=headers).json()["data"]
    assert poll["id"] == poll_id
    assert poll["question"] == "Where do we eat?"
    assert poll["createdBy"] == "Olivia Owner"

    [valid] = client.get("/plugin/poll/getValidPolls", params={"circleId": circle_id},
                         headers=headers).json()["data"]
    assert valid["id"] == poll_id


def test_future_poll_is_valid_but_not_active(client, member_setup):
    _, circle_id, headers = member_setup
    poll_id = _add_poll(client, circle_id, headers, period=_period(2, 3))
    _add_answer(client, circle_id, poll_id, headers)

    assert client.get("/plugin/poll/getActives", params={"circleId": circle_id},
                      headers=headers).status_code == 404
    assert client.get("/plugin/poll/getValidPolls", params={"circleId": circle_id},
                      headers=headers).status_code == 200


def test_voting_once_per_poll(client, member_setup, make_user, add_member, auth_headers):
    owner, circle_id, headers = member_setup
    voter = make_user(first_name="Vera", last_name="Voter")
    add_member(circle_id, voter, owner)

    poll_id = _add_poll(client, circle_id, headers)
    pizza = _add_answer(client, circle_id, poll_id, headers, "Pizza")
    sushi = _add_answer(client, circle_id, poll_id, headers, "Sushi")

    no_votes = client.get("/plugin/poll/getVotes", params={"circleId": circle_id, "pollId": poll_id},
                          headers=headers)
    assert no_votes.status_code == 404
    assert no_votes.json()["status"]["errors"] == ["There are no Votes for this Poll."]

    voted = client.post("/plugin/poll/addVote", json={"circleId": circle_id, "pollId": poll_id, "answerId": pizza},
                        headers=auth_headers(voter))
    assert voted.status_code == 200
    again = client.post("/plugin/poll/addVote", json={"circleId": circle_id, "pollId": poll_id, "answerId": sushi},
                        headers=auth_headers(voter))
    assert again.status_code == 409
    assert again.json()["status"]["errors"] == ["User already voted in this poll."]

    answers = client.get("/plugin/poll/getActiveAnswers", params={"circleId": circle_id, "pollId": poll_id},
                         headers=headers).json()["data"]
    assert {a["answer"]: a["totalVotes"] for a in answers} == {"Pizza": 1, "Sushi": 0}

    [vote] = client.get("/plugin/poll/getVotes", params={"circleId": circle_id, "pollId": poll_id},
                        headers=headers).json()["data"]
    assert vote["answerId"] == pizza
    assert vote["userId"] == voter.id
    assert vote["name"] == "Vera Voter"


def test_vote_for_answer_of_another_poll(client, member_setup):
    _, circle_id, headers = member_setup
    first = _add_poll(client, circle_id, headers, "First?")
    second = _add_poll(client, circle_id, headers, "Second?")
    answer_id = _add_answer(client, circle_id, first, headers)

    response = client.post("/plugin/poll/addVote",
                           json={"circleId": circle_id, "pollId": second, "answerId": answer_id}, headers=headers)
    assert response.status_code == 404
    assert response.json()["status"]["errors"] == ["Answer not found."]


def test_edit_and_remove(client, member_setup):
    _, circle_id, headers = member_setup
    poll_id = _add_poll(client, circle_id, headers)
    answer_id = _add_answer(client, circle_id, poll_id, headers)
    start_on, end_on = _period(-2, 2)

    edited = client.put("/plugin/poll/edit", json={
        "circleId": circle_id, "id": poll_id, "question": "Lunch or dinner?", "startOn": start_on, "endOn": end_on,
    }, headers=headers)
    assert edited.status_code == 200
    assert client.put("/plugin/poll/editAnswer", json={
        "circleId": circle_id, "pollId": poll_id, "id": answer_id, "answer": "Dinner",
    }, headers=headers).status_code == 200

    [poll] = client.get("/plugin/poll/getActives", params={"circleId": circle_id}, headers=headers).json()["data"]
    assert poll["question"] == "Lunch or dinner?"

    assert client.request("DELETE", "/plugin/poll/removeAnswer",
                          json={"circleId": circle_id, "pollId": poll_id, "id": answer_id},
                          headers=headers).status_code == 200
    no_answers = client.get("/plugin/poll/getActiveAnswers", params={"circleId": circle_id, "pollId": poll_id},
                            headers=headers)
    assert no_answers.json()["status"]["errors"] == ["There are no Active Answer for this Poll."]

    assert client.request("DELETE", "/plugin/poll/remove", json={"circleId": circle_id, "id": poll_id},
                          headers=headers).status_code == 200
    gone = client.post("/plugin/poll/addAnswer", json={"circleId": circle_id, "pollId": poll_id, "answer": "Late"},
                       headers=headers)
    assert gone.status_code == 404
    assert gone.json()["status"]["errors"] == ["Poll not found."]


def test_poll_validation(client, member_setup):
    _, circle_id, headers = member_setup
    bad_date = client.post("/plugin/poll/add", json={
        "circleId": circle_id, "question": "When?", "startOn": "tomorrow", "endOn": "2030-01-01 00:00:00",
    }, headers=headers)
    assert bad_date.status_code == 422
    assert bad_date.json()["status"]["errors"] == [
        "Start on is not a valid datetime format (yyyy-MM-dd HH:MM:SS)"
    ]

    start_on, end_on = _period(1, -1)
    inverted = client.post("/plugin/poll/add", json={
        "circleId": circle_id, "question": "When?", "startOn": start_on, "endOn": end_on,
    }, headers=headers)
    assert inverted.status_code == 422
    assert inverted.json()["status"]["errors"] == ["End on must be after start on"]

    missing_poll = client.get("/plugin/poll/getVotes", params={"circleId": circle_id}, headers=headers)
    assert missing_poll.status_code == 422
    assert missing_poll.json()["status"]["errors"] == ["Poll Id is required"]
