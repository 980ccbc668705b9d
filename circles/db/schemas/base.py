from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from circles.utils.validators import check_id


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CircleScoped(CamelModel):
    circle_id: int = Field(default=None, validate_default=True)

    @field_validator("circle_id", mode="before")
    @classmethod
    def _check_circle_id(cls, v):
        return check_id(v, "Circle Id is required")
