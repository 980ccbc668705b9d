"""
Field-level validation rules shared by the request schemas.

Each helper raises ``ValueError`` with the exact human-readable message that
ends up in the transport envelope's error list.
"""
from __future__ import annotations

import re
from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any

from email_validator import EmailNotValidError, validate_email

PASSWORD_MESSAGE = (
    "Password requires one lower case letter, one upper case letter, one digit, "
    "6-13 length, and no spaces"
)
EMAIL_MESSAGE = "E-mail must be a valid e-mail."

_PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?!.*\s).{6,13}$")
_DATETIME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})$")
_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
# decimal(11,8)
_LATITUDE_RE = re.compile(r"^-?([1-8]?[1-9]|[1-9]0)\.\d{1,8}")
_LONGITUDE_RE = re.compile(r"^-?([1]?[1-7][1-9]|[1]?[1-8][0]|[1-9]?[0-9])\.\d{1,8}")


def check_length(value: Any, minimum: int, maximum: int, message: str) -> str:
    text = "" if value is None else str(value).strip()
    if not (minimum <= len(text) <= maximum):
        raise ValueError(message)
    return text


def check_not_empty(value: Any, message: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValueError(message)
    return text


def check_password(value: Any) -> str:
    if not isinstance(value, str) or not _PASSWORD_RE.match(value):
        raise ValueError(PASSWORD_MESSAGE)
    return value


def check_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(EMAIL_MESSAGE)
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError(EMAIL_MESSAGE)
    return result.normalized.lower()


def parse_datetime(value: Any, label: str) -> datetime:
    """Parse ``yyyy-MM-dd HH:MM:SS`` as a UTC timestamp."""
    message = f"{label} is not a valid datetime format (yyyy-MM-dd HH:MM:SS)"
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if not isinstance(value, str) or not _DATETIME_RE.match(value.strip()):
        raise ValueError(message)
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m-%d %H:%M:%S")
    except ValueError:
        raise ValueError(message)
    return parsed.replace(tzinfo=UTC)


def parse_date(value: Any, message: str) -> date:
    """Parse a value starting with ``yyyy-MM-dd``; anything after the date is ignored."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PREFIX_RE.match(value.strip()):
        raise ValueError(message)
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(message)


def parse_decimal(value: Any, message: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(message)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError):
        raise ValueError(message)
    if not number.is_finite():
        raise ValueError(message)
    return number


def parse_latitude(value: Any) -> Decimal:
    if value is None or not _LATITUDE_RE.match(str(value).strip()):
        raise ValueError("Latitude is not valid")
    return parse_decimal(value, "Latitude is not valid")


def parse_longitude(value: Any) -> Decimal:
    if value is None or not _LONGITUDE_RE.match(str(value).strip()):
        raise ValueError("Longitude is not valid")
    return parse_decimal(value, "Longitude is not valid")


def check_id(value: Any, message: str) -> int:
    """Positive integer identifiers; numeric strings are accepted."""
    if isinstance(value, bool) or value is None:
        raise ValueError(message)
    text = str(value).strip()
    if not text.isdigit() or int(text) <= 0:
        raise ValueError(message)
    return int(text)
