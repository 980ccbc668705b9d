from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from circles.utils import validators
from circles.utils.validators import EMAIL_MESSAGE, PASSWORD_MESSAGE


@pytest.mark.parametrize("password", ["Secret1", "aB3456", "Abcdefghijk12"])
def test_password_accepted(password):
    assert validators.check_password(password) == password


@pytest.mark.parametrize("password", ["secret1", "SECRET1", "Secret", "Se1", "Secret 12", "Abcdefghijk123", None])
def test_password_rejected(password):
    with pytest.raises(ValueError) as exc:
        validators.check_password(password)
    assert str(exc.value) == PASSWORD_MESSAGE


def test_email_normalized():
    assert validators.check_email("  Ada@Example.COM ") == "ada@example.com"


@pytest.mark.parametrize("email", ["", "not-an-email", None, "a@b"])
def test_email_rejected(email):
    with pytest.raises(ValueError) as exc:
        validators.check_email(email)
    assert str(exc.value) == EMAIL_MESSAGE


def test_check_length_strips_and_bounds():
    assert validators.check_length("  milk ", 3, 254, "bad") == "milk"
    with pytest.raises(ValueError, match="bad"):
        validators.check_length("ab", 3, 254, "bad")
    with pytest.raises(ValueError, match="bad"):
        validators.check_length("x" * 255, 3, 254, "bad")


def test_parse_datetime():
    parsed = validators.parse_datetime("2024-03-01 10:30:00", "Start on")
    assert parsed == datetime(2024, 3, 1, 10, 30, tzinfo=UTC)
    with pytest.raises(ValueError) as exc:
        validators.parse_datetime("2024-03-01T10:30:00", "Start on")
    assert str(exc.value) == "Start on is not a valid datetime format (yyyy-MM-dd HH:MM:SS)"
    with pytest.raises(ValueError):
        validators.parse_datetime("2024-02-30 10:30:00", "End on")


def test_parse_date_ignores_suffix():
    assert validators.parse_date("2024-03-01 10:30:00", "bad") == date(2024, 3, 1)
    assert validators.parse_date("2024-03-01", "bad") == date(2024, 3, 1)
    with pytest.raises(ValueError, match="bad"):
        validators.parse_date("03/01/2024", "bad")


def test_parse_decimal():
    assert validators.parse_decimal("12.50", "bad") == Decimal("12.50")
    for value in ("abc", True, "NaN", None):
        with pytest.raises(ValueError, match="bad"):
            validators.parse_decimal(value, "bad")


def test_coordinates():
    assert validators.parse_latitude("45.12345678") == Decimal("45.12345678")
    assert validators.parse_longitude("-73.12345678") == Decimal("-73.12345678")
    with pytest.raises(ValueError, match="Latitude is not valid"):
        validators.parse_latitude("north")
    with pytest.raises(ValueError, match="Longitude is not valid"):
        validators.parse_longitude(None)


def test_check_id():
    assert validators.check_id("12", "Circle Id is required") == 12
    assert validators.check_id(7, "Circle Id is required") == 7
    for value in (None, "", "0", "-1", "abc", True):
        with pytest.raises(ValueError, match="Circle Id is required"):
            validators.check_id(value, "Circle Id is required")
