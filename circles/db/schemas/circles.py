from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.utils.validators import check_email, check_id, check_length


class CircleCreate(CamelModel):
    name: str = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, v):
        return check_length(v, 3, 56, "The name must have a minimum of 3 characters and a maximum of 56 characters")


class CircleRef(CircleScoped):
    pass


class InviteMember(CircleScoped):
    email: str = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, v):
        return check_email(v)


class RemoveMember(CircleScoped):
    """``userId`` omitted means the caller is leaving the circle."""
    user_id: Optional[int] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def _check_user_id(cls, v):
        if v is None or v == "":
            return None
        return check_id(v, "User Id is required")


class SetAdmin(CircleScoped):
    user_id: int = Field(default=None, validate_default=True)
    admin: bool = True

    @field_validator("user_id", mode="before")
    @classmethod
    def _check_user_id(cls, v):
        return check_id(v, "User Id is required")


class CircleMembership(CamelModel):
    """One entry of ``GET /circle/byUser``; serialized as ``{id, name, isOwner, isAdmin, joinedAt}``."""
    circle_id: int = Field(serialization_alias="id")
    name: str
    is_owner: bool
    is_admin: bool
    joined_on: Optional[datetime] = Field(default=None, serialization_alias="joinedAt")


class CircleMemberOut(CamelModel):
    user_id: Optional[int] = None
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    is_owner: bool
    is_admin: bool
    joined_on: Optional[datetime] = None
