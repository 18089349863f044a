# File: app/schemas/base.py
from typing import Any, Type
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def serialize(schema: Type[CamelModel], obj: Any) -> dict:
    """Render an ORM object through a schema using wire (camelCase) names"""
    return schema.model_validate(obj).model_dump(by_alias=True)
