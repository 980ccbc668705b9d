"""
URL utilities for building absolute links in emails and API payloads.

The base URL comes from the caller: either APP_BASE_URL (via ``AppConfig``)
or the base URL of the request being served.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def build_email_validation_link(base_url: str, token: str) -> str:
    qs = urlencode({"token": token})
    return f"{_strip_trailing_slash(base_url)}/user/validateEmail?{qs}"


def build_password_reset_link(base_url: str, token: str) -> str:
    qs = urlencode({"token": token})
    return f"{_strip_trailing_slash(base_url)}/user/validateForgotPassword?{qs}"


def build_photo_url(base_url: str, plugin: str, photo_id: Optional[str]) -> Optional[str]:
    """Public download URL for a stored plugin photo, or None when there is no photo."""
    if not photo_id:
        return None
    return f"{_strip_trailing_slash(base_url)}/plugin/{plugin}/photo/{photo_id}"
