"""
Circle endpoints: creation, membership and invitations.
"""
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from circles.api.deps import (
    circle_id_query,
    get_app_config,
    get_current_user_context,
    get_member_circles,
    get_notification_service,
    request_base_url,
)
from circles.db import schemas
from circles.db.database import get_db
from circles.db.repositories import users as user_repo
from circles.services.circle_service import CircleService
from circles.services.notification_service import NotificationService
from circles.utils.config import AppConfig
from circles.utils.errors import NotFound
from circles.utils.transport import ok

router = APIRouter(prefix="/circle", tags=["circles"])


def get_circle_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
    member_circles: List[int] = Depends(get_member_circles),
) -> CircleService:
    return CircleService(db, config=config, notifications=notifications, member_circles=member_circles)


@router.post("/create")
def create_circle(
    body: schemas.CircleCreate,
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    circle_id = service.create_circle(user.id, user.email, body.name)
    return ok({"circleId": circle_id})


@router.get("/byUser")
def circles_by_user(
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    try:
        memberships = service.circles_for_user(user.id)
    except NotFound:
        memberships = []
    return ok([m.to_wire() for m in memberships])


@router.get("/members")
def circle_members(
    circle_id: int = Depends(circle_id_query),
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.require_member_of(user.id, circle_id)
    return ok([m.to_wire() for m in service.list_members(circle_id)])


@router.post("/inviteUser")
def invite_user(
    body: schemas.InviteMember,
    request: Request,
    db: Session = Depends(get_db),
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    invitee = user_repo.get_user_by_email(db, body.email)
    service.invite_member(
        user.id,
        invitee.id if invitee is not None else None,
        body.email,
        body.circle_id,
        request_base_url(request),
    )
    return ok()


@router.post("/confirmUserAsMember")
def confirm_user_as_member(
    body: schemas.CircleRef,
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.confirm_membership(user.id, body.circle_id)
    return ok()


@router.post("/removeUserAsMember")
def remove_user_as_member(
    body: schemas.RemoveMember,
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    target = body.user_id if body.user_id is not None else user.id
    service.remove_membership(target, body.circle_id, removed_by=user.id)
    return ok()


@router.post("/setAdmin")
def set_admin(
    body: schemas.SetAdmin,
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.set_admin(user.id, body.circle_id, body.user_id, body.admin)
    return ok()


@router.post("/deactivate")
def deactivate_circle(
    body: schemas.CircleRef,
    service: CircleService = Depends(get_circle_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.deactivate_circle(user.id, body.circle_id)
    return ok()
