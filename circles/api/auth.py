"""
Login endpoints: local e-mail/password and Google sign-in.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from circles.api.deps import get_app_config, get_identity_verifier
from circles.db import schemas
from circles.db.database import get_db
from circles.services.authorization_service import AuthorizationService, GoogleIdentityVerifier
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/local")
def login_local(
    body: schemas.LocalLogin,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
):
    service = AuthorizationService(db, config=config)
    return ok(service.authenticate(body.email, body.password))


@router.post("/google")
def login_google(
    body: schemas.GoogleLogin,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier),
):
    service = AuthorizationService(db, config=config, verifier=verifier)
    return ok(service.google_login(body.token))
