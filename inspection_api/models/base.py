from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialized with camelCase keys, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentInput(BaseModel):
    """Free-form document payload; unknown fields are stored as sent."""

    model_config = ConfigDict(extra="allow")
