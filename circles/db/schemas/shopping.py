from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.db.schemas.todos import DESCRIPTION_MESSAGE
from circles.utils.validators import check_id, check_length, parse_decimal


class ShoppingItemAdd(CircleScoped):
    description: str = Field(default=None, validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, v):
        return check_length(v, 3, 254, DESCRIPTION_MESSAGE)


class ShoppingItemRef(CircleScoped):
    id: int = Field(default=None, validate_default=True)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, v):
        return check_id(v, "Shopping list Item Id is required")


class ShoppingItemUpdate(ShoppingItemRef):
    description: str = Field(default=None, validate_default=True)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, v):
        return check_length(v, 3, 254, DESCRIPTION_MESSAGE)


class ShoppingItemPurchase(ShoppingItemRef):
    price: Decimal = Field(default=None, validate_default=True)

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, v):
        price = parse_decimal(v, "Price need to be a decimal value")
        if price < 0:
            raise ValueError("Price need to be a decimal value")
        return price


class ShoppingItemOut(CamelModel):
    id: int
    description: str
    photo_url: Optional[str] = None
    created_by: str
    created_on: datetime
    purchased_by: Optional[str] = None
    purchased_on: Optional[datetime] = None
    purchased_price: Optional[float] = None
    removed_by: Optional[str] = None
    removed_on: Optional[datetime] = None
