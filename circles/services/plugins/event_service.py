from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from circles.db.repositories import circles as circle_repo
from circles.db.repositories import events as event_repo
from circles.db.schemas import EventMemberOut, EventOut, EventPhotoOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.services.storage import PhotoStorage
from circles.utils.errors import Conflict, Internal, NotFound
from circles.utils.urls import build_photo_url

EVENT_NOT_FOUND = "Event not found."
PHOTO_NOT_FOUND = "Photo not founded."
PHOTO_CATEGORY = "event"


class EventService(CirclePluginService):
    """Calendar events with attendees and photos."""

    def __init__(self, db, config=None, circles=None, storage: Optional[PhotoStorage] = None, member_circles=None):
        super().__init__(db, config=config, circles=circles, member_circles=member_circles)
        self.storage = storage or PhotoStorage(self.config)

    def _event_in_circle(self, event_id: int, circle_id: int):
        with storage_guard(self.db, "get_event"):
            event = event_repo.get_event(self.db, event_id, circle_id)
        if event is None:
            raise NotFound(EVENT_NOT_FOUND)
        return event

    def add(self, user_id: int, circle_id: int, title: str, start_on: datetime, end_on: datetime,
            note: Optional[str] = None) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_event"):
            event_id = event_repo.add_event(self.db, circle_id, user_id, title, start_on, end_on, note)
        return {"id": event_id}

    def update(self, user_id: int, circle_id: int, event_id: int, title: str, start_on: datetime,
               end_on: datetime, note: Optional[str] = None) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "update_event"):
            if not event_repo.update_event(self.db, event_id, circle_id, title, start_on, end_on, note):
                raise NotFound(EVENT_NOT_FOUND)

    def remove(self, user_id: int, circle_id: int, event_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_event"):
            if not event_repo.remove_event(self.db, event_id, circle_id, user_id):
                raise NotFound(EVENT_NOT_FOUND)

    def list(self, user_id: int, circle_id: int, start: date, end: date) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "list_events"):
            events = event_repo.get_events(self.db, circle_id, start, end)
        if not events:
            raise NotFound("There are no Events.")
        return [EventOut.model_validate(e).to_wire() for e in events]

    def add_member(self, user_id: int, circle_id: int, event_id: int, member_user_id: int) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        with storage_guard(self.db, "add_event_member"):
            if circle_id not in circle_repo.get_confirmed_circle_ids(self.db, member_user_id):
                raise NotFound("User is not a member of this circle.")
            if event_repo.get_event_member(self.db, event_id, member_user_id) is not None:
                raise Conflict("User already member of the event")
            member_id = event_repo.add_member(self.db, event_id, member_user_id, user_id)
        return {"id": member_id}

    def list_members(self, user_id: int, circle_id: int, event_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        with storage_guard(self.db, "list_event_members"):
            users = event_repo.get_members(self.db, event_id)
        if not users:
            raise NotFound("There are no Members.")
        return [EventMemberOut(id=u.id, name=u.full_name, photo_url=u.photo_url).to_wire() for u in users]

    def remove_member(self, user_id: int, circle_id: int, event_id: int, member_user_id: int) -> None:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        with storage_guard(self.db, "remove_event_member"):
            if not event_repo.remove_member(self.db, event_id, member_user_id, user_id):
                raise NotFound("Member not found.")

    def add_photo(self, user_id: int, circle_id: int, event_id: int, upload: UploadFile,
                  base_url: str) -> Dict[str, Optional[str]]:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        path = self.storage.save(upload, PHOTO_CATEGORY)
        try:
            with storage_guard(self.db, "add_event_photo"):
                photo_id = event_repo.add_photo(self.db, event_id, path, user_id)
        except Internal:
            self.storage.remove(path)
            raise
        return {
            "photoId": photo_id,
            "photoUrl": build_photo_url(self.config.base_url_or(base_url), PHOTO_CATEGORY, photo_id),
        }

    def list_photos(self, user_id: int, circle_id: int, event_id: int, base_url: str) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        with storage_guard(self.db, "list_event_photos"):
            photos = event_repo.get_photos(self.db, event_id)
        if not photos:
            raise NotFound("There are no Photos.")
        base = self.config.base_url_or(base_url)
        return [
            EventPhotoOut(photo_id=p.photo_id, photo_url=build_photo_url(base, PHOTO_CATEGORY, p.photo_id)).to_wire()
            for p in photos
        ]

    def photo(self, user_id: int, photo_id: str) -> Path:
        with storage_guard(self.db, "get_event_photo"):
            path = event_repo.get_photo_path_for_member(self.db, photo_id, user_id)
        if path is None:
            raise NotFound(PHOTO_NOT_FOUND)
        return self.storage.resolve(path)

    def remove_photo(self, user_id: int, circle_id: int, event_id: int, photo_id: str) -> None:
        self._require_member(user_id, circle_id)
        self._event_in_circle(event_id, circle_id)
        with storage_guard(self.db, "remove_event_photo"):
            if not event_repo.remove_photo(self.db, event_id, photo_id, user_id):
                raise NotFound(PHOTO_NOT_FOUND)
