from typing import List, Optional

from sqlalchemy.orm import Session

from circles.services.circle_service import CircleService
from circles.utils.config import AppConfig, get_config


class CirclePluginService:
    """Common wiring for services whose data is scoped to a circle.

    Every circle-scoped operation first checks that the caller is a confirmed
    member of the circle.
    """

    def __init__(self, db: Session, config: Optional[AppConfig] = None,
                 circles: Optional[CircleService] = None, member_circles: Optional[List[int]] = None):
        self.db = db
        self.config = config or get_config()
        self.circles = circles or CircleService(db, config=self.config, member_circles=member_circles)

    def _require_member(self, user_id: int, circle_id: int) -> None:
        self.circles.require_member_of(user_id, circle_id)
