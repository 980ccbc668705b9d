"""
Event plugin endpoints.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from circles.api.deps import (
    circle_id_query,
    get_app_config,
    get_current_user_context,
    get_member_circles,
    get_photo_storage,
    id_query,
    request_base_url,
)
from circles.db import schemas
from circles.db.database import get_db
from circles.services.plugins import EventService
from circles.services.storage import PhotoStorage
from circles.utils.config import AppConfig
from circles.utils.errors import ValidationFailed
from circles.utils.transport import ok
from circles.utils.validators import parse_date

router = APIRouter(prefix="/plugin/event", tags=["event"])


def get_event_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    storage: PhotoStorage = Depends(get_photo_storage),
    member_circles: List[int] = Depends(get_member_circles),
) -> EventService:
    return EventService(db, config=config, storage=storage, member_circles=member_circles)


def event_id_query(
    event_id: Optional[str] = Query(default=None, alias="eventId"),
    user_context=Depends(get_current_user_context),
) -> int:
    return id_query(event_id, "Event Id is required")


def _query_date(value: Optional[str], label: str) -> date:
    try:
        return parse_date(value, f"{label} is not a valid datetime format (yyyy-MM-dd HH:MM:SS)")
    except ValueError as e:
        raise ValidationFailed(str(e))


@router.post("/add")
def add_event(
    body: schemas.EventAdd,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add(user.id, body.circle_id, body.title, body.start_on, body.end_on, body.note))


@router.put("/update")
def update_event(
    body: schemas.EventUpdate,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.update(user.id, body.circle_id, body.id, body.title, body.start_on, body.end_on, body.note)
    return ok()


@router.delete("/remove")
def remove_event(
    body: schemas.EventRef,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove(user.id, body.circle_id, body.id)
    return ok()


@router.get("/list")
def list_events(
    circle_id: int = Depends(circle_id_query),
    start_on: Optional[str] = Query(default=None, alias="startOn"),
    end_on: Optional[str] = Query(default=None, alias="endOn"),
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    start = _query_date(start_on, "Start on")
    end = _query_date(end_on, "End on")
    return ok(service.list(user.id, circle_id, start, end))


@router.post("/addMember")
def add_member(
    body: schemas.EventMemberRef,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add_member(user.id, body.circle_id, body.event_id, body.user_id))


@router.get("/listMembers")
def list_members(
    circle_id: int = Depends(circle_id_query),
    event_id: int = Depends(event_id_query),
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.list_members(user.id, circle_id, event_id))


@router.put("/removeMember")
def remove_member(
    body: schemas.EventMemberRef,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove_member(user.id, body.circle_id, body.event_id, body.user_id)
    return ok()


@router.post("/addPhoto")
def add_photo(
    request: Request,
    circle_id: Optional[str] = Form(default=None, alias="circleId"),
    event_id: Optional[str] = Form(default=None, alias="eventId"),
    photo: Optional[UploadFile] = File(default=None),
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    result = service.add_photo(
        user.id,
        id_query(circle_id, "Circle Id is required"),
        id_query(event_id, "Event Id is required"),
        photo,
        request_base_url(request),
    )
    return ok(result)


@router.get("/listPhotos")
def list_photos(
    request: Request,
    circle_id: int = Depends(circle_id_query),
    event_id: int = Depends(event_id_query),
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.list_photos(user.id, circle_id, event_id, request_base_url(request)))


@router.get("/photo/{photo_id}")
def get_photo(
    photo_id: str,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return FileResponse(service.photo(user.id, photo_id), media_type="image/jpeg")


@router.delete("/removePhoto")
def remove_photo(
    body: schemas.EventPhotoRef,
    service: EventService = Depends(get_event_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove_photo(user.id, body.circle_id, body.event_id, body.photo_id)
    return ok()
