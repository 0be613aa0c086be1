"""Base model classes for the interview scoring engine."""

from pydantic import BaseModel as PydanticBaseModel
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """Immutable value object accepting snake_case or camelCase field names."""

    class Config:
        """Pydantic configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = False

    def to_json(self) -> str:
        """Serialize with the camelCase names used by browser callers."""
        return self.model_dump_json(by_alias=True, indent=2)
