"""
Plugin catalogue and per-circle attachment endpoints (circle admins only).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from circles.api.deps import circle_id_query, get_app_config, get_current_user_context
from circles.db import schemas
from circles.db.database import get_db
from circles.services.circle_service import CircleService
from circles.services.plugin_service import PluginService
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin", tags=["plugins"])


def get_plugin_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
) -> PluginService:
    return PluginService(db, circles=CircleService(db, config=config))


@router.get("/getAll")
def get_all_plugins(
    service: PluginService = Depends(get_plugin_service),
    user_context=Depends(get_current_user_context),
):
    return ok([p.to_wire() for p in service.list_active()])


@router.get("/getAllFromCircle")
def get_circle_plugins(
    circle_id: int = Depends(circle_id_query),
    service: PluginService = Depends(get_plugin_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok([p.to_wire() for p in service.list_for_circle(circle_id, user.id)])


@router.post("/addPluginFromCircle")
def add_plugin_to_circle(
    body: schemas.PluginAttach,
    service: PluginService = Depends(get_plugin_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.attach(body.plugin_id, body.circle_id, user.id)
    return ok()


@router.post("/removePluginFromCircle")
def remove_plugin_from_circle(
    body: schemas.PluginAttach,
    service: PluginService = Depends(get_plugin_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.detach(body.plugin_id, body.circle_id, user.id)
    return ok()
