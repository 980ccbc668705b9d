"""
Application configuration loaded from environment variables.

The configuration is read once (see ``get_config``) and handed to services
through their constructors so business logic never reads ``os.environ``.
"""
from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class AppConfig:
    """Configuration for authentication, quotas, retention and uploads."""

    def __init__(self):
        self.auth_secret = os.getenv('AUTH_SECRET', 'change-me')
        self.auth_algorithm = os.getenv('AUTH_ALGORITHM', 'HS256')
        self.token_ttl_days = _int_env('AUTH_TOKEN_TTL_DAYS', 31)
        self.google_client_ids = [
            cid.strip()
            for cid in (
                os.getenv('AUTH_GOOGLE_IOS_CLIENT_ID', ''),
                os.getenv('AUTH_GOOGLE_WEB_CLIENT_ID', ''),
            )
            if cid and cid.strip()
        ]

        self.free_tier_circle_limit = _int_env('FREE_TIER_CIRCLE_LIMIT', 2)
        self.display_retention_days = _int_env('DISPLAY_RETENTION_DAYS', 7)
        self.valid_poll_window_days = _int_env('VALID_POLL_WINDOW_DAYS', 31)

        self.email_verification_ttl_hours = _int_env('EMAIL_VERIFICATION_TTL_HOURS', 48)
        self.password_reset_ttl_hours = _int_env('PASSWORD_RESET_TTL_HOURS', 2)

        self.upload_root = os.getenv('UPLOAD_ROOT', 'public')
        self.upload_max_bytes = _int_env('UPLOAD_MAX_BYTES', 2 * 1024 ** 2)

        base = (os.getenv('APP_BASE_URL') or '').strip()
        self.app_base_url: Optional[str] = base.rstrip('/') if base else None

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.auth_secret or self.auth_secret == 'change-me':
            errors.append("AUTH_SECRET must be set to a private value")
        if self.token_ttl_days <= 0:
            errors.append("AUTH_TOKEN_TTL_DAYS must be a positive integer")
        if self.free_tier_circle_limit < 0:
            errors.append("FREE_TIER_CIRCLE_LIMIT must not be negative")
        if self.display_retention_days < 0:
            errors.append("DISPLAY_RETENTION_DAYS must not be negative")
        if self.upload_max_bytes <= 0:
            errors.append("UPLOAD_MAX_BYTES must be a positive integer")

        return errors

    def base_url_or(self, request_base_url: str) -> str:
        """Return APP_BASE_URL when configured, else the caller's request base URL."""
        if self.app_base_url:
            return self.app_base_url
        return str(request_base_url).rstrip('/')


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the process-wide configuration, read on first use."""
    return AppConfig()
