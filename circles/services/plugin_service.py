"""
Plugin catalogue and per-circle attachment.

Only circle admins may list, attach or detach plugins. An attachment is one
row per (circle, plugin) pair that is re-activated instead of duplicated.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from circles.db.repositories import plugins as plugin_repo
from circles.db.schemas import PluginOut
from circles.services._guards import storage_guard
from circles.services.circle_service import CircleService
from circles.utils.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class PluginService:
    def __init__(self, db: Session, circles: CircleService = None):
        self.db = db
        self.circles = circles or CircleService(db)

    def list_active(self) -> List[PluginOut]:
        with storage_guard(self.db, "list_plugins"):
            plugins = plugin_repo.get_active_plugins(self.db)
        if not plugins:
            raise NotFound("There are no active plugins.")
        return [PluginOut.model_validate(p) for p in plugins]

    def list_for_circle(self, circle_id: int, user_id: int) -> List[PluginOut]:
        self.circles.require_admin_of(user_id, circle_id)
        with storage_guard(self.db, "list_circle_plugins"):
            plugins = plugin_repo.get_plugins_in_circle(self.db, circle_id)
        return [PluginOut.model_validate(p) for p in plugins]

    def attach(self, plugin_id: int, circle_id: int, user_id: int) -> None:
        self.circles.require_admin_of(user_id, circle_id)

        with storage_guard(self.db, "attach_plugin"):
            if plugin_repo.get_active_plugin(self.db, plugin_id) is None:
                raise NotFound("Plugin not found.")

            existing = plugin_repo.get_attachment(self.db, plugin_id, circle_id)
            if existing is not None:
                if existing.inactivated_on is None:
                    raise Conflict("Plugin already attached to this circle.")
                if not plugin_repo.reactivate_plugin_in_circle(self.db, plugin_id, circle_id, user_id):
                    raise Conflict("Plugin already attached to this circle.")
            else:
                try:
                    plugin_repo.add_plugin_to_circle(self.db, plugin_id, circle_id, user_id)
                except IntegrityError:
                    self.db.rollback()
                    raise Conflict("Plugin already attached to this circle.")

        logger.info("plugin_attached: plugin_id=%s circle_id=%s by=%s", plugin_id, circle_id, user_id)

    def detach(self, plugin_id: int, circle_id: int, user_id: int) -> None:
        self.circles.require_admin_of(user_id, circle_id)

        with storage_guard(self.db, "detach_plugin"):
            detached = plugin_repo.remove_plugin_from_circle(self.db, plugin_id, circle_id, user_id)
        if not detached:
            raise Conflict("Plugin is not attached to this circle.")
        logger.info("plugin_detached: plugin_id=%s circle_id=%s by=%s", plugin_id, circle_id, user_id)
