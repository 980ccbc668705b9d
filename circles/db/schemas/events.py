from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.db.schemas.polls import PERIOD_MESSAGE
from circles.utils.validators import check_id, check_length, check_not_empty, parse_datetime

TITLE_MESSAGE = "The Title must have a minimum of 3 characters and a maximum of 254 characters"


class EventAdd(CircleScoped):
    title: str = Field(default=None, validate_default=True)
    start_on: datetime = Field(default=None, validate_default=True)
    end_on: datetime = Field(default=None, validate_default=True)
    note: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, v):
        return check_length(v, 3, 254, TITLE_MESSAGE)

    @field_validator("start_on", mode="before")
    @classmethod
    def _check_start_on(cls, v):
        return parse_datetime(v, "Start on")

    @field_validator("end_on", mode="before")
    @classmethod
    def _check_end_on(cls, v):
        return parse_datetime(v, "End on")

    @model_validator(mode="after")
    def _check_period(self):
        if self.start_on > self.end_on:
            raise ValueError(PERIOD_MESSAGE)
        return self


class EventUpdate(EventAdd):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Event Id is required")


class EventRef(CircleScoped):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Event Id is required")


class _EventScoped(CircleScoped):
    event_id: int = Field(default=None, validate_default=True)

    @field_validator("event_id", mode="before")
    @classmethod
    def _check_event_id(cls, v):
        return check_id(v, "Event Id is required")


class EventMemberRef(_EventScoped):
    user_id: int = Field(default=None, validate_default=True)

    @field_validator("user_id", mode="before")
    @classmethod
    def _check_user_id(cls, v):
        return check_id(v, "User Id is required")


class EventPhotoRef(_EventScoped):
    photo_id: str = Field(default=None, validate_default=True)

    @field_validator("photo_id", mode="before")
    @classmethod
    def _check_photo_id(cls, v):
        return check_not_empty(v, "PhotoId is required")


class EventOut(CamelModel):
    id: int
    title: str
    note: Optional[str] = None
    start_on: datetime
    end_on: datetime


class EventMemberOut(CamelModel):
    id: int
    name: str
    photo_url: Optional[str] = None


class EventPhotoOut(CamelModel):
    photo_id: str
    photo_url: Optional[str] = None
