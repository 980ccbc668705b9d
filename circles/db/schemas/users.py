from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from circles.db.models import UserType
from circles.db.schemas.base import CamelModel
from circles.utils.validators import (
    check_email,
    check_not_empty,
    check_password,
    parse_date,
)


class EmailOnly(CamelModel):
    email: str = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, v):
        return check_email(v)


class LocalLogin(EmailOnly):
    password: str = Field(default=None, validate_default=True)

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, v):
        return check_password(v)


class GoogleLogin(CamelModel):
    token: str = Field(default=None, validate_default=True)

    @field_validator("token", mode="before")
    @classmethod
    def _check_token(cls, v):
        return check_not_empty(v, "Google Token is required.")


class UserCreate(LocalLogin):
    first_name: str = Field(default=None, validate_default=True)
    last_name: str = Field(default=None, validate_default=True)

    @field_validator("first_name", mode="before")
    @classmethod
    def _check_first_name(cls, v):
        return check_not_empty(v, "First name cannot be empty.")

    @field_validator("last_name", mode="before")
    @classmethod
    def _check_last_name(cls, v):
        return check_not_empty(v, "Last name cannot be empty.")


class ResetPassword(LocalLogin):
    token: str = Field(default=None, validate_default=True)

    @field_validator("token", mode="before")
    @classmethod
    def _check_token(cls, v):
        return check_not_empty(v, "Token cannot be empty.")


class ChangePassword(CamelModel):
    password: str = Field(default=None, validate_default=True)

    @field_validator("password", mode="before")
    @classmethod
    def _check_password(cls, v):
        return check_password(v)


class ProfileUpdate(CamelModel):
    first_name: str = Field(default=None, validate_default=True)
    last_name: str = Field(default=None, validate_default=True)
    date_of_birth: Optional[date] = None

    @field_validator("first_name", mode="before")
    @classmethod
    def _check_first_name(cls, v):
        return check_not_empty(v, "First name cannot be empty.")

    @field_validator("last_name", mode="before")
    @classmethod
    def _check_last_name(cls, v):
        return check_not_empty(v, "Last name cannot be empty.")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _check_date_of_birth(cls, v):
        if v is None or v == "":
            return None
        return parse_date(v, "Enter a valid date")


class UserOut(CamelModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None
    date_of_birth: Optional[date] = None
    type: UserType


class LoginResult(CamelModel):
    token: str
    user: UserOut
