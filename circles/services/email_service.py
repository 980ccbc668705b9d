"""
Email Service

This service handles SMTP email sending for account and circle notifications.
Uses aiosmtplib for async email delivery and Jinja2 for the email bodies.
"""

import os
import re
import asyncio
import logging
from numbers import Number
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from jinja2 import DebugUndefined, Environment, FileSystemLoader, TemplateNotFound

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"


class EmailServiceConfig:
    """Configuration for email service from environment variables."""

    def __init__(self):
        self.smtp_host = os.getenv('SMTP_HOST', 'localhost')
        self.smtp_port = int(os.getenv('SMTP_PORT', '587'))
        self.smtp_username = os.getenv('SMTP_USERNAME', '')
        self.smtp_password = os.getenv('SMTP_PASSWORD', '')
        self.smtp_use_tls = os.getenv('SMTP_USE_TLS', 'false').lower() == 'true'
        self.smtp_use_ssl = os.getenv('SMTP_USE_SSL', 'false').lower() == 'true'
        self.from_email = os.getenv('FROM_EMAIL', 'noreply@circles.app')
        self.from_name = os.getenv('FROM_NAME', 'Circles')

        self.template_dir = os.getenv('EMAIL_TEMPLATE_DIR', str(DEFAULT_TEMPLATE_DIR))

    def is_configured(self) -> bool:
        """Check if email service is properly configured."""
        return bool(self.smtp_host and self.smtp_port and self.from_email)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.smtp_host:
            errors.append("SMTP_HOST is required")
        if not self.smtp_port or self.smtp_port <= 0:
            errors.append("SMTP_PORT must be a positive integer")
        if not self.from_email:
            errors.append("FROM_EMAIL is required")
        if self.smtp_use_ssl and self.smtp_use_tls:
            errors.append("Cannot use both SSL and STARTTLS simultaneously")

        return errors


def substitution_context(context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only string and numeric values; other placeholders stay as written."""
    if not context:
        return {}
    return {
        key: value
        for key, value in context.items()
        if isinstance(value, (str, Number)) and not isinstance(value, bool)
    }


class EmailService:
    """Service for sending emails via SMTP."""

    def __init__(self, config: Optional[EmailServiceConfig] = None):
        self.config = config or EmailServiceConfig()
        self.template_env = None
        self._setup_templates()

    def _setup_templates(self):
        template_path = Path(self.config.template_dir)
        if not template_path.exists():
            logger.warning("Email template directory not found: %s", template_path)
        self.template_env = Environment(
            loader=FileSystemLoader(str(template_path)),
            undefined=DebugUndefined,
        )

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send an email via SMTP.

        Returns:
            Dict with 'success' and either 'smtp_result' or 'error'
        """
        if not self.config.is_configured():
            return {
                'success': False,
                'error': 'Email service not configured'
            }

        message = MIMEMultipart('alternative')
        message['From'] = f"{self.config.from_name} <{self.config.from_email}>"
        message['To'] = to_email
        message['Subject'] = subject

        if text_content:
            message.attach(MIMEText(text_content, 'plain', 'utf-8'))
        message.attach(MIMEText(html_content, 'html', 'utf-8'))

        try:
            result = await self._send_via_smtp(message)
        except (aiosmtplib.SMTPException, OSError) as e:
            error_msg = f"Failed to send email to {to_email}: {e}"
            logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg
            }

        logger.info("email_sent: to=%s subject=%s", to_email, subject)
        return result

    async def _send_via_smtp(self, message: MIMEMultipart) -> Dict[str, Any]:
        smtp_kwargs = {
            'hostname': self.config.smtp_host,
            'port': self.config.smtp_port,
            'start_tls': self.config.smtp_use_tls,
        }

        if self.config.smtp_use_ssl:
            smtp_kwargs['start_tls'] = False
            smtp_kwargs['use_tls'] = True

        async with aiosmtplib.SMTP(**smtp_kwargs) as smtp:
            if self.config.smtp_username and self.config.smtp_password:
                await smtp.login(self.config.smtp_username, self.config.smtp_password)

            result = await smtp.send_message(message)

            return {
                'success': True,
                'smtp_result': result
            }

    def send_email_sync(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run ``send_email`` from synchronous request handlers."""
        return asyncio.run(self.send_email(
            to_email=to_email,
            subject=subject,
            html_content=html_content,
            text_content=text_content,
        ))

    def render_template(self, template_name: str, context: Optional[Dict[str, Any]]) -> Tuple[str, str]:
        """
        Render email template with context.

        Returns:
            Tuple of (html_content, text_content)
        """
        values = substitution_context(context)
        html_content = self.template_env.get_template(f"{template_name}.html").render(**values)

        try:
            text_content = self.template_env.get_template(f"{template_name}.txt").render(**values)
        except TemplateNotFound:
            text_content = self._html_to_text(html_content)

        return html_content, text_content

    def _html_to_text(self, html_content: str) -> str:
        text = re.sub(r'<[^>]+>', '', html_content)
        text = text.replace('&amp;', '&').replace('&lt;', '<').replace('&gt;', '>')
        text = text.replace('&quot;', '"').replace('&#39;', "'")
        text = re.sub(r'\s+', ' ', text).strip()
        return text


# Global email service instance
_email_service = None


def get_email_service() -> EmailService:
    """Get singleton email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
