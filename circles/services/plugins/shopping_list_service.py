from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import UploadFile

from circles.db.repositories import shopping as shopping_repo
from circles.db.schemas import ShoppingItemOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.services.storage import PhotoStorage
from circles.utils.errors import Internal, NotFound
from circles.utils.urls import build_photo_url

ITEM_NOT_FOUND = "There are no item with this id."
PHOTO_CATEGORY = "shoppingList"


class ShoppingListService(CirclePluginService):
    """Shopping list shared by all members of a circle."""

    def __init__(self, db, config=None, circles=None, storage: Optional[PhotoStorage] = None, member_circles=None):
        super().__init__(db, config=config, circles=circles, member_circles=member_circles)
        self.storage = storage or PhotoStorage(self.config)

    def add(self, user_id: int, circle_id: int, description: str) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_shopping_item"):
            item_id = shopping_repo.add_item(self.db, user_id, circle_id, description)
        return {"id": item_id}

    def set_photo(self, user_id: int, circle_id: int, item_id: int, upload: UploadFile,
                  base_url: str) -> Dict[str, Optional[str]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "get_shopping_item"):
            if shopping_repo.get_item(self.db, item_id, circle_id) is None:
                raise NotFound(ITEM_NOT_FOUND)
        path = self.storage.save(upload, PHOTO_CATEGORY)
        try:
            with storage_guard(self.db, "set_shopping_photo"):
                photo_id = shopping_repo.set_photo_path(self.db, item_id, circle_id, path)
            if photo_id is None:
                raise NotFound(ITEM_NOT_FOUND)
        except (Internal, NotFound):
            self.storage.remove(path)
            raise
        return {
            "photoId": photo_id,
            "photoUrl": build_photo_url(self.config.base_url_or(base_url), PHOTO_CATEGORY, photo_id),
        }

    def update(self, user_id: int, circle_id: int, item_id: int, description: str) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "update_shopping_item"):
            if not shopping_repo.update_item(self.db, item_id, circle_id, description):
                raise NotFound(ITEM_NOT_FOUND)

    def mark_as_purchased(self, user_id: int, circle_id: int, item_id: int, price: Decimal) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "purchase_shopping_item"):
            if not shopping_repo.mark_as_purchased(self.db, item_id, user_id, circle_id, price):
                raise NotFound(ITEM_NOT_FOUND)

    def remove(self, user_id: int, circle_id: int, item_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_shopping_item"):
            if not shopping_repo.remove_item(self.db, item_id, user_id, circle_id):
                raise NotFound(ITEM_NOT_FOUND)

    def list(self, user_id: int, circle_id: int, base_url: str,
             now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "list_shopping_items"):
            rows = shopping_repo.get_active_items(self.db, circle_id, self.config.display_retention_days, now)
        if not rows:
            raise NotFound("There are no Shopping list itens.")
        base = self.config.base_url_or(base_url)
        return [
            ShoppingItemOut(
                id=item.id,
                description=item.description,
                photo_url=build_photo_url(base, PHOTO_CATEGORY, item.photo_id),
                created_by=creator.full_name,
                created_on=item.created_on,
                purchased_by=purchaser.full_name if purchaser is not None else None,
                purchased_on=item.purchased_on,
                purchased_price=item.purchased_price,
                removed_by=remover.full_name if remover is not None else None,
                removed_on=item.removed_on,
            ).to_wire()
            for item, creator, purchaser, remover in rows
        ]

    def photo(self, user_id: int, photo_id: str) -> Path:
        with storage_guard(self.db, "get_shopping_photo"):
            item = shopping_repo.get_item_by_photo_id(self.db, photo_id)
        if item is None or not item.photo_path:
            raise NotFound("Photo not found.")
        self._require_member(user_id, item.circle_id)
        return self.storage.resolve(item.photo_path)
