from datetime import timedelta

import pytest

from circles.db.models import now_utc
from circles.db.repositories import todos as todo_repo
from circles.services.plugins import TodoService
from circles.utils.errors import NotFound, Unauthorized


@pytest.fixture
def service(db_session, app_config):
    return TodoService(db_session, config=app_config)


def test_done_todo_visible_within_retention_window(service, db_session, member_setup):
    owner, circle_id, _ = member_setup
    done_id = service.add(owner.id, circle_id, "Buy stamps")["id"]
    open_id = service.add(owner.id, circle_id, "Water plants")["id"]

    t = now_utc()
    assert todo_repo.mark_as_done(db_session, done_id, owner.id, circle_id, now=t)

    listed = {row["id"]: row for row in service.list(owner.id, circle_id, now=t + timedelta(days=6))}
    assert listed[done_id]["done"] is True
    assert listed[open_id]["done"] is False

    listed = {row["id"] for row in service.list(owner.id, circle_id, now=t + timedelta(days=8))}
    assert listed == {open_id}


def test_removed_todo_drops_out_after_window(service, db_session, member_setup):
    owner, circle_id, _ = member_setup
    todo_id = service.add(owner.id, circle_id, "Call grandma")["id"]
    t = now_utc()
    assert todo_repo.remove_todo(db_session, todo_id, owner.id, circle_id, now=t)

    [row] = service.list(owner.id, circle_id, now=t + timedelta(days=1))
    assert row["removed"] is True
    with pytest.raises(NotFound) as exc:
        service.list(owner.id, circle_id, now=t + timedelta(days=8))
    assert exc.value.message == "There are no To-dos."


def test_todos_are_private_to_their_creator(service, member_setup, make_user, add_member):
    owner, circle_id, _ = member_setup
    member = make_user()
    add_member(circle_id, member, owner)
    todo_id = service.add(owner.id, circle_id, "Secret plan")["id"]

    with pytest.raises(NotFound):
        service.list(member.id, circle_id)
    with pytest.raises(NotFound):
        service.mark_as_done(member.id, circle_id, todo_id)


def test_todo_requires_membership(service, member_setup, make_user):
    _, circle_id, _ = member_setup
    with pytest.raises(Unauthorized):
        service.add(make_user().id, circle_id, "Intruder")
