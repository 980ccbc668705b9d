from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError

from circles.db.repositories import tracking as tracking_repo
from circles.db.schemas import PositionOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.utils.errors import Internal, NotFound


class TrackingSystemService(CirclePluginService):
    """Last known location of each member."""

    def set_position(self, user_id: int, latitude: Decimal, longitude: Decimal) -> None:
        """Store the caller's position; one row per user."""
        with storage_guard(self.db, "set_position"):
            if tracking_repo.get_position(self.db, user_id) is None:
                try:
                    tracking_repo.add_position(self.db, user_id, latitude, longitude)
                    return
                except IntegrityError:
                    # Another request inserted the row first.
                    self.db.rollback()
            if not tracking_repo.update_position(self.db, user_id, latitude, longitude):
                raise Internal()

    def positions(self, user_id: int, circle_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "circle_positions"):
            rows = tracking_repo.get_positions_in_circle(self.db, circle_id)
        if not rows:
            raise NotFound("There are no current positions for users in this circle.")
        return [
            PositionOut(
                user_id=member.id,
                name=member.full_name,
                photo_url=member.photo_url,
                latitude=position.latitude,
                longitude=position.longitude,
                last_updated_on=position.last_updated_on,
            ).to_wire()
            for position, member in rows
        ]
