"""
Shopping-list plugin endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
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
from circles.services.plugins import ShoppingListService
from circles.services.storage import PhotoStorage
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin/shoppingList", tags=["shoppingList"])


def get_shopping_list_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    storage: PhotoStorage = Depends(get_photo_storage),
    member_circles: List[int] = Depends(get_member_circles),
) -> ShoppingListService:
    return ShoppingListService(db, config=config, storage=storage, member_circles=member_circles)


@router.post("/add")
def add_item(
    body: schemas.ShoppingItemAdd,
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add(user.id, body.circle_id, body.description))


@router.put("/setPhotoPath")
def set_photo_path(
    request: Request,
    circle_id: Optional[str] = Form(default=None, alias="circleId"),
    item_id: Optional[str] = Form(default=None, alias="id"),
    photo: Optional[UploadFile] = File(default=None),
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    result = service.set_photo(
        user.id,
        id_query(circle_id, "Circle Id is required"),
        id_query(item_id, "Shopping list Item Id is required"),
        photo,
        request_base_url(request),
    )
    return ok(result)


@router.put("/update")
def update_item(
    body: schemas.ShoppingItemUpdate,
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.update(user.id, body.circle_id, body.id, body.description)
    return ok()


@router.put("/markAsPurchased")
def mark_as_purchased(
    body: schemas.ShoppingItemPurchase,
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.mark_as_purchased(user.id, body.circle_id, body.id, body.price)
    return ok()


@router.delete("/remove")
def remove_item(
    body: schemas.ShoppingItemRef,
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove(user.id, body.circle_id, body.id)
    return ok()


@router.get("/list")
def list_items(
    request: Request,
    circle_id: int = Depends(circle_id_query),
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.list(user.id, circle_id, request_base_url(request)))


@router.get("/photo/{photo_id}")
def get_photo(
    photo_id: str,
    service: ShoppingListService = Depends(get_shopping_list_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return FileResponse(service.photo(user.id, photo_id), media_type="image/jpeg")
