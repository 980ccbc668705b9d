"""
Tracking-system plugin endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from circles.api.deps import circle_id_query, get_app_config, get_current_user_context, get_member_circles
from circles.db import schemas
from circles.db.database import get_db
from circles.services.plugins import TrackingSystemService
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin/trackingSystem", tags=["trackingSystem"])


def get_tracking_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    member_circles: List[int] = Depends(get_member_circles),
) -> TrackingSystemService:
    return TrackingSystemService(db, config=config, member_circles=member_circles)


@router.post("/setPosition")
def set_position(
    body: schemas.PositionSet,
    service: TrackingSystemService = Depends(get_tracking_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.set_position(user.id, body.latitude, body.longitude)
    return ok()


@router.get("/getPositions")
def get_positions(
    circle_id: int = Depends(circle_id_query),
    service: TrackingSystemService = Depends(get_tracking_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.positions(user.id, circle_id))
