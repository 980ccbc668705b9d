"""
Notification service: renders account and circle emails and dispatches them.

Every ``notify_*`` method returns the send result dict and never raises;
callers decide whether a failed send is fatal for their operation.
"""

import logging
from typing import Any, Dict, Optional

from jinja2 import TemplateError

from circles.services.email_service import EmailService, get_email_service
from circles.utils.config import AppConfig, get_config
from circles.utils.urls import build_email_validation_link, build_password_reset_link

logger = logging.getLogger(__name__)

# Template name constants (match template file names)
TEMPLATE_VERIFY_EMAIL = 'verify_email_account'
TEMPLATE_FORGOT_PASSWORD = 'forgot_password'
TEMPLATE_CIRCLE_INVITATION = 'circle_invitation'


class NotificationService:
    """Service class for transactional email notifications."""

    def __init__(self, email_service: Optional[EmailService] = None, config: Optional[AppConfig] = None):
        self.email_service = email_service or get_email_service()
        self.config = config or get_config()

    def _send(self, template_name: str, to_email: str, subject: str, context: Dict[str, Any]) -> Dict[str, Any]:
        try:
            html, text = self.email_service.render_template(template_name, context)
        except TemplateError as e:
            logger.error("email_render_failed: template=%s error=%s", template_name, e)
            return {'success': False, 'error': f"Template rendering failed for {template_name}"}

        result = self.email_service.send_email_sync(
            to_email=to_email,
            subject=subject,
            html_content=html,
            text_content=text,
        )
        if not result.get('success'):
            logger.error("email_send_failed: template=%s to=%s error=%s", template_name, to_email, result.get('error'))
        return result

    def notify_email_verification(self, user_email: str, first_name: Optional[str], token: str,
                                  base_url: str) -> Dict[str, Any]:
        base = self.config.base_url_or(base_url)
        context = {
            'userName': first_name or user_email,
            'baseUrl': base,
            'emailToken': token,
            'validationUrl': build_email_validation_link(base, token),
        }
        return self._send(TEMPLATE_VERIFY_EMAIL, user_email, 'Verify your account', context)

    def notify_password_reset(self, user_email: str, token: str, base_url: str) -> Dict[str, Any]:
        base = self.config.base_url_or(base_url)
        context = {
            'userEmail': user_email,
            'baseUrl': base,
            'emailToken': token,
            'resetUrl': build_password_reset_link(base, token),
            'expiresInHours': self.config.password_reset_ttl_hours,
        }
        return self._send(TEMPLATE_FORGOT_PASSWORD, user_email, 'Forgot Password', context)

    def notify_circle_invitation(self, invitee_email: str, circle_name: str, inviter_name: Optional[str],
                                 base_url: str) -> Dict[str, Any]:
        context = {
            'circleName': circle_name,
            'inviterName': inviter_name or 'A member',
            'inviteeEmail': invitee_email,
            'baseUrl': self.config.base_url_or(base_url),
        }
        return self._send(TEMPLATE_CIRCLE_INVITATION, invitee_email, f"You were invited to {circle_name}", context)
