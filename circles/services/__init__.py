"""Business logic services package."""

from .email_service import EmailService, EmailServiceConfig, get_email_service
from .notification_service import NotificationService
from .circle_service import CircleService, NotAMember, MemberNotAdmin, Admin
from .plugin_service import PluginService
from .user_service import UserService
from .authorization_service import AuthorizationService, GoogleIdentity, GoogleIdentityVerifier
from .storage import PhotoStorage

__all__ = [
    "EmailService",
    "EmailServiceConfig",
    "get_email_service",
    "NotificationService",
    "CircleService",
    "NotAMember",
    "MemberNotAdmin",
    "Admin",
    "PluginService",
    "UserService",
    "AuthorizationService",
    "GoogleIdentity",
    "GoogleIdentityVerifier",
    "PhotoStorage",
]
