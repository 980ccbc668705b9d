from pydantic import AliasChoices, Field, field_validator

from circles.db.schemas.base import CamelModel, CircleScoped
from circles.utils.validators import check_id


class PluginAttach(CircleScoped):
    plugin_id: int = Field(default=None, validate_default=True, validation_alias=AliasChoices("id", "pluginId"))

    @field_validator("plugin_id", mode="before")
    @classmethod
    def _check_plugin_id(cls, v):
        return check_id(v, "Plugin Id is required")


class PluginOut(CamelModel):
    id: int
    name: str
    price: float
