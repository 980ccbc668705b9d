from datetime import date
from decimal import Decimal

from pydantic import Field, field_validator, model_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.utils.validators import check_id, check_length, parse_date, parse_decimal


def _positive_amount(value, message: str) -> Decimal:
    amount = parse_decimal(value, message)
    if amount <= 0:
        raise ValueError(message)
    return amount


class BillAdd(CircleScoped):
    bill_name: str = Field(default=None, validate_default=True)
    bill_amount: Decimal = Field(default=None, validate_default=True)
    bill_category: int = Field(default=None, validate_default=True)
    bill_date: date = Field(default=None, validate_default=True)

    @field_validator("bill_name", mode="before")
    @classmethod
    def _check_bill_name(cls, v):
        return check_length(v, 3, 56, "The bill must have a minimum of 3 characters and a maximum of 56 characters")

    @field_validator("bill_amount", mode="before")
    @classmethod
    def _check_bill_amount(cls, v):
        return _positive_amount(v, "A valid bill amount is required")

    @field_validator("bill_category", mode="before")
    @classmethod
    def _check_bill_category(cls, v):
        return check_id(v, "Bill category is not valid")

    @field_validator("bill_date", mode="before")
    @classmethod
    def _check_bill_date(cls, v):
        return parse_date(v, "Enter a valid date")


class BillRemove(CircleScoped):
    bill_id: int = Field(default=None, validate_default=True)

    @field_validator("bill_id", mode="before")
    @classmethod
    def _check_bill_id(cls, v):
        return check_id(v, "A valid Bill Id is required")


class BudgetAdd(CircleScoped):
    budget_name: str = Field(default=None, validate_default=True)
    budget_amount: Decimal = Field(default=None, validate_default=True)
    budget_start_date: date = Field(default=None, validate_default=True)
    budget_end_date: date = Field(default=None, validate_default=True)

    @field_validator("budget_name", mode="before")
    @classmethod
    def _check_budget_name(cls, v):
        return check_length(v, 3, 56, "The budget must have a minimum of 3 characters and a maximum of 56 characters")

    @field_validator("budget_amount", mode="before")
    @classmethod
    def _check_budget_amount(cls, v):
        return _positive_amount(v, "A valid budget amount is required")

    @field_validator("budget_start_date", mode="before")
    @classmethod
    def _check_start(cls, v):
        return parse_date(v, "Enter a valid start date")

    @field_validator("budget_end_date", mode="before")
    @classmethod
    def _check_end(cls, v):
        return parse_date(v, "Enter a valid end date")

    @model_validator(mode="after")
    def _check_period(self):
        if self.budget_start_date > self.budget_end_date:
            raise ValueError("Enter a valid end date")
        return self


class BudgetRemove(CircleScoped):
    budget_id: int = Field(default=None, validate_default=True)

    @field_validator("budget_id", mode="before")
    @classmethod
    def _check_budget_id(cls, v):
        return check_id(v, "A valid Budget Id is required")


class BillCategoryOut(CamelModel):
    id: int
    name: str


class BillOut(CamelModel):
    id: int
    bill_name: str
    bill_amount: float
    bill_category_id: int
    bill_category: str
    bill_date: date
    user_id: int
    user_name: str


class BudgetOut(CamelModel):
    id: int
    budget_name: str
    budget_amount: float
    start_date: date
    end_date: date
    user_id: int
    user_name: str
