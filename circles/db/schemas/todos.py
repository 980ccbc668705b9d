from datetime import datetime

from pydantic import Field, field_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.utils.validators import check_id, check_length

DESCRIPTION_MESSAGE = "The description must have a minimum of 3 characters and a maximum of 254 characters"


class TodoAdd(CircleScoped):
    description: str = Field(default=None, validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, v):
        return check_length(v, 3, 254, DESCRIPTION_MESSAGE)


class TodoRef(CircleScoped):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "To-do Id is required")


class TodoUpdate(TodoRef):
    description: str = Field(default=None, validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, v):
        return check_length(v, 3, 254, DESCRIPTION_MESSAGE)


class TodoOut(CamelModel):
    id: int
    description: str
    created_on: datetime
    done: bool
    removed: bool
