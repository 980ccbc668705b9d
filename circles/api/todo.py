"""
To-do plugin endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from circles.api.deps import circle_id_query, get_app_config, get_current_user_context, get_member_circles
from circles.db import schemas
from circles.db.database import get_db
from circles.services.plugins import TodoService
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin/todo", tags=["todo"])


def get_todo_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    member_circles: List[int] = Depends(get_member_circles),
) -> TodoService:
    return TodoService(db, config=config, member_circles=member_circles)


@router.post("/add")
def add_todo(
    body: schemas.TodoAdd,
    service: TodoService = Depends(get_todo_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add(user.id, body.circle_id, body.description))


@router.put("/markAsDone")
def mark_todo_as_done(
    body: schemas.TodoRef,
    service: TodoService = Depends(get_todo_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.mark_as_done(user.id, body.circle_id, body.id)
    return ok()


@router.delete("/remove")
def remove_todo(
    body: schemas.TodoRef,
    service: TodoService = Depends(get_todo_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove(user.id, body.circle_id, body.id)
    return ok()


@router.put("/update")
def update_todo(
    body: schemas.TodoUpdate,
    service: TodoService = Depends(get_todo_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.update(user.id, body.circle_id, body.id, body.description)
    return ok()


@router.get("/list")
def list_todos(
    circle_id: int = Depends(circle_id_query),
    service: TodoService = Depends(get_todo_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.list(user.id, circle_id))
