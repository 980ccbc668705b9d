"""
User account endpoints.

``validateEmail`` and ``validateForgotPassword`` are opened from e-mail links
in a browser and answer with HTML pages; every other route returns the
transport envelope.
"""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from circles.api.deps import (
    get_app_config,
    get_current_user_context,
    get_notification_service,
    request_base_url,
)
from circles.db import schemas
from circles.db.database import get_db
from circles.services.notification_service import NotificationService
from circles.services.user_service import UserService
from circles.utils.config import AppConfig
from circles.utils.errors import NotFound
from circles.utils.transport import ok

router = APIRouter(prefix="/user", tags=["users"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates" / "pages"))


def _service(db: Session, config: AppConfig, notifications: NotificationService) -> UserService:
    return UserService(db, config=config, notifications=notifications)


@router.post("/create")
def create_user(
    body: schemas.UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    _service(db, config, notifications).register(
        body.email, body.password, body.first_name, body.last_name, request_base_url(request)
    )
    return ok()


@router.get("/validateEmail")
def validate_email(
    request: Request,
    token: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    if not token or not token.strip():
        return templates.TemplateResponse(request, "not_found.html", {"message": "Token cannot be empty."},
                                          status_code=404)
    try:
        _service(db, config, notifications).validate_email(token.strip())
    except NotFound as e:
        return templates.TemplateResponse(request, "not_found.html", {"message": e.message}, status_code=404)
    return templates.TemplateResponse(request, "check_email.html", {})


@router.post("/resendValidationEmail")
def resend_validation_email(
    body: schemas.EmailOnly,
    request: Request,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    _service(db, config, notifications).resend_validation_email(body.email, request_base_url(request))
    return ok()


@router.post("/forgotPassword")
def forgot_password(
    body: schemas.EmailOnly,
    request: Request,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    _service(db, config, notifications).forgot_password(body.email, request_base_url(request))
    return ok()


@router.get("/validateForgotPassword")
def validate_forgot_password(
    request: Request,
    token: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    token = (token or "").strip()
    if not token or not _service(db, config, notifications).validate_forgot_password(token):
        return templates.TemplateResponse(
            request, "not_found.html", {"message": "The token is invalid or has expired"}, status_code=404
        )
    return templates.TemplateResponse(request, "reset_password.html", {"token": token})


@router.post("/resetPassword")
def reset_password(
    body: schemas.ResetPassword,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
):
    _service(db, config, notifications).reset_password(body.token, body.email, body.password)
    return ok()


@router.get("/me")
def get_me(user_context=Depends(get_current_user_context)):
    user, current_user = user_context
    return ok(schemas.UserOut.model_validate(user).to_wire())


@router.put("/profile")
def update_profile(
    body: schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    updated = _service(db, config, notifications).update_profile(
        user.id, body.first_name, body.last_name, body.date_of_birth
    )
    return ok(schemas.UserOut.model_validate(updated).to_wire())


@router.put("/changePassword")
def change_password(
    body: schemas.ChangePassword,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    notifications: NotificationService = Depends(get_notification_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    _service(db, config, notifications).change_password(user.id, body.password)
    return ok()
