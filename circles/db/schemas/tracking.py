from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from circles.db.schemas.base import CamelModel
from circles.utils.validators import parse_latitude, parse_longitude


class PositionSet(CamelModel):
    latitude: Decimal = Field(default=None, validate_default=True)
    longitude: Decimal = Field(default=None, validate_default=True)

    @field_validator("latitude", mode="before")
    @classmethod
    def _check_latitude(cls, v):
        return parse_latitude(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def _check_longitude(cls, v):
        return parse_longitude(v)


class PositionOut(CamelModel):
    user_id: int
    name: str
    photo_url: Optional[str] = None
    latitude: float
    longitude: float
    last_updated_on: Optional[datetime] = None
