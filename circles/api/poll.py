"""
Poll plugin endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from circles.api.deps import (
    circle_id_query,
    get_app_config,
    get_current_user_context,
    get_member_circles,
    id_query,
)
from circles.db import schemas
from circles.db.database import get_db
from circles.services.plugins import PollService
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin/poll", tags=["poll"])


def get_poll_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    member_circles: List[int] = Depends(get_member_circles),
) -> PollService:
    return PollService(db, config=config, member_circles=member_circles)


def poll_id_query(
    poll_id: Optional[str] = Query(default=None, alias="pollId"),
    user_context=Depends(get_current_user_context),
) -> int:
    return id_query(poll_id, "Poll Id is required")


@router.post("/add")
def add_poll(
    body: schemas.PollAdd,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add(user.id, body.circle_id, body.question, body.start_on, body.end_on))


@router.put("/edit")
def edit_poll(
    body: schemas.PollEdit,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.edit(user.id, body.circle_id, body.id, body.question, body.start_on, body.end_on)
    return ok()


@router.delete("/remove")
def remove_poll(
    body: schemas.PollRef,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove(user.id, body.circle_id, body.id)
    return ok()


@router.get("/getActives")
def get_active_polls(
    circle_id: int = Depends(circle_id_query),
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.active_polls(user.id, circle_id))


@router.get("/getValidPolls")
def get_valid_polls(
    circle_id: int = Depends(circle_id_query),
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.valid_polls(user.id, circle_id))


@router.post("/addAnswer")
def add_answer(
    body: schemas.AnswerAdd,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add_answer(user.id, body.circle_id, body.poll_id, body.answer))


@router.put("/editAnswer")
def edit_answer(
    body: schemas.AnswerEdit,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.edit_answer(user.id, body.circle_id, body.poll_id, body.id, body.answer)
    return ok()


@router.delete("/removeAnswer")
def remove_answer(
    body: schemas.AnswerRef,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove_answer(user.id, body.circle_id, body.poll_id, body.id)
    return ok()


@router.get("/getActiveAnswers")
def get_active_answers(
    circle_id: int = Depends(circle_id_query),
    poll_id: int = Depends(poll_id_query),
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.active_answers(user.id, circle_id, poll_id))


@router.post("/addVote")
def add_vote(
    body: schemas.VoteAdd,
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add_vote(user.id, body.circle_id, body.poll_id, body.answer_id))


@router.get("/getVotes")
def get_votes(
    circle_id: int = Depends(circle_id_query),
    poll_id: int = Depends(poll_id_query),
    service: PollService = Depends(get_poll_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.votes(user.id, circle_id, poll_id))
